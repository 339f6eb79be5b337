"""Balance and transfer type definitions for the ChainLine wallet."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..constants import ASSETS, ASSET_IDS
from ..types.common import Address, AssetId, Fixed8, ScriptHash, TxId

__all__ = [
    "Coin",
    "AssetBalance",
    "Balance",
    "TransferIntent",
    "ClaimItem",
    "ClaimData",
]


def _decimal(value: Any) -> Decimal:
    # Floats go through str so 0.1 stays 0.1
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class Coin:
    """Unspent output owned by the account."""
    index: int
    txid: TxId
    value: Decimal
    asset_id: Optional[AssetId] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], asset_id: Optional[str] = None) -> "Coin":
        """Create from indexer JSON ({"index", "txid", "value"})."""
        asset_id = data.get("asset_id", asset_id)
        return cls(
            index=int(data["index"]),
            txid=TxId(data["txid"]),
            value=_decimal(data["value"]),
            asset_id=AssetId(asset_id) if asset_id is not None else None,
        )


@dataclass(frozen=True)
class AssetBalance:
    """Balance of one asset and the coins making it up."""
    balance: Decimal
    unspent: List[Coin] = field(default_factory=list)

    @property
    def unspent_total(self) -> Decimal:
        return sum((coin.value for coin in self.unspent), Decimal(0))


@dataclass(frozen=True)
class Balance:
    """
    Account balance as reported by an indexer.

    Assets are keyed by symbol ("NEO", "GAS").
    """
    address: Address
    assets: Dict[str, AssetBalance] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Balance":
        """
        Create from the indexer JSON shape.

        Args:
            data: {"address": ..., "NEO": {"balance": ..., "unspent": [...]}, ...}

        Returns:
            Balance instance
        """
        assets = {}
        for symbol, asset_id in ASSETS.items():
            entry = data.get(symbol)
            if entry is None:
                continue
            assets[symbol] = AssetBalance(
                balance=_decimal(entry.get("balance", 0)),
                unspent=[
                    Coin.from_dict(coin, asset_id)
                    for coin in entry.get("unspent", [])
                ],
            )
        return cls(address=Address(data["address"]), assets=assets)

    def get(self, asset: str) -> Optional[AssetBalance]:
        """Get balance by symbol or asset id."""
        symbol = ASSET_IDS.get(asset, asset)
        return self.assets.get(symbol)


@dataclass(frozen=True)
class TransferIntent:
    """Request to send `value` of an asset to a script hash."""
    asset_id: AssetId
    value: Decimal
    script_hash: ScriptHash


@dataclass(frozen=True)
class ClaimItem:
    """Claimable output; `claim` is the GAS amount in Fixed8 units."""
    txid: TxId
    index: int
    claim: Fixed8

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClaimItem":
        return cls(
            txid=TxId(data["txid"]),
            index=int(data["index"]),
            claim=Fixed8(int(data["claim"])),
        )


@dataclass(frozen=True)
class ClaimData:
    """Claimable GAS for an address."""
    address: Address
    claims: List[ClaimItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClaimData":
        return cls(
            address=Address(data["address"]),
            claims=[ClaimItem.from_dict(claim) for claim in data.get("claims", [])],
        )

    @property
    def total(self) -> Fixed8:
        return Fixed8(sum(claim.claim for claim in self.claims))
