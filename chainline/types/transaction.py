"""Transaction-related type definitions for the ChainLine wallet."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import ClassVar, List

from ..constants import ASSET_IDS, FIXED8_FACTOR, TX_VERSION
from ..types.common import AssetId, Fixed8, ScriptHash, TxId

__all__ = [
    "TransactionType",
    "TransactionAttributeUsage",
    "TransactionAttribute",
    "TransactionInput",
    "TransactionOutput",
    "Witness",
    "Transaction",
    "ClaimTransaction",
    "ContractTransaction",
    "InvocationTransaction",
]


class TransactionType(IntEnum):
    """Transaction kinds, by wire discriminant."""
    CLAIM = 0x02
    CONTRACT = 0x80
    INVOCATION = 0xd1


class TransactionAttributeUsage(IntEnum):
    """Attribute usage bytes."""
    CONTRACT_HASH = 0x00
    ECDH02 = 0x02
    ECDH03 = 0x03
    SCRIPT = 0x20
    VOTE = 0x30
    DESCRIPTION_URL = 0x81
    DESCRIPTION = 0x90

    HASH1 = 0xa1
    HASH2 = 0xa2
    HASH3 = 0xa3
    HASH4 = 0xa4
    HASH5 = 0xa5
    HASH6 = 0xa6
    HASH7 = 0xa7
    HASH8 = 0xa8
    HASH9 = 0xa9
    HASH10 = 0xaa
    HASH11 = 0xab
    HASH12 = 0xac
    HASH13 = 0xad
    HASH14 = 0xae
    HASH15 = 0xaf

    REMARK = 0xf0
    REMARK1 = 0xf1
    REMARK2 = 0xf2
    REMARK3 = 0xf3
    REMARK4 = 0xf4
    REMARK5 = 0xf5
    REMARK6 = 0xf6
    REMARK7 = 0xf7
    REMARK8 = 0xf8
    REMARK9 = 0xf9
    REMARK10 = 0xfa
    REMARK11 = 0xfb
    REMARK12 = 0xfc
    REMARK13 = 0xfd
    REMARK14 = 0xfe
    REMARK15 = 0xff


@dataclass(frozen=True)
class TransactionAttribute:
    """
    Transaction attribute.

    For ECDH02/ECDH03 the data holds the full 33-byte compressed point;
    only the x coordinate goes on the wire.
    """
    usage: TransactionAttributeUsage
    data: bytes

    def __repr__(self) -> str:
        return f"TransactionAttribute({self.usage.name}, {self.data.hex()})"


@dataclass(frozen=True)
class TransactionInput:
    """Reference to a previous transaction output."""
    prev_hash: TxId
    prev_index: int

    def __str__(self) -> str:
        """String representation as txid:index."""
        return f"{self.prev_hash}:{self.prev_index}"


@dataclass(frozen=True)
class TransactionOutput:
    """Transaction output."""
    asset_id: AssetId
    value: Fixed8
    script_hash: ScriptHash

    @property
    def decimal_value(self) -> Decimal:
        """Get value in whole asset units."""
        return Decimal(self.value) / FIXED8_FACTOR

    @property
    def asset_symbol(self) -> str:
        """Get asset symbol, or the asset id for non-native assets."""
        return ASSET_IDS.get(self.asset_id, self.asset_id)


@dataclass(frozen=True)
class Witness:
    """Invocation and verification script pair proving ownership."""
    invocation_script: bytes
    verification_script: bytes


@dataclass(frozen=True)
class Transaction:
    """
    Common transaction fields.

    Concrete kinds are ClaimTransaction, ContractTransaction and
    InvocationTransaction; each carries its wire discriminant in `type`.
    """
    type: ClassVar[TransactionType]

    version: int = 0
    attributes: List[TransactionAttribute] = field(default_factory=list)
    inputs: List[TransactionInput] = field(default_factory=list)
    outputs: List[TransactionOutput] = field(default_factory=list)
    witnesses: List[Witness] = field(default_factory=list)

    @property
    def is_signed(self) -> bool:
        return bool(self.witnesses)


@dataclass(frozen=True)
class ClaimTransaction(Transaction):
    """Claims generated GAS for spent NEO outputs."""
    type: ClassVar[TransactionType] = TransactionType.CLAIM

    version: int = TX_VERSION["CLAIM"]
    claims: List[TransactionInput] = field(default_factory=list)


@dataclass(frozen=True)
class ContractTransaction(Transaction):
    """Plain asset transfer."""
    type: ClassVar[TransactionType] = TransactionType.CONTRACT

    version: int = TX_VERSION["CONTRACT"]


@dataclass(frozen=True)
class InvocationTransaction(Transaction):
    """
    Runs a script on the VM.

    The gas field is only serialized for version 1 and above.
    """
    type: ClassVar[TransactionType] = TransactionType.INVOCATION

    version: int = TX_VERSION["INVOCATION"]
    script: bytes = b""
    gas: Fixed8 = Fixed8(0)
