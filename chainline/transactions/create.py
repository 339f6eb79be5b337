"""Unsigned transaction builders with coin selection."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union, TYPE_CHECKING

from ..constants import ASSETS, GAS_ASSET_ID, MAX_CLAIMS, TX_VERSION
from ..exceptions import (
    InsufficientFundsError,
    TransactionError,
    UnsupportedTransactionKindError,
    ValidationError,
)
from ..modules.fee import fixed8_gas_ceil
from ..types.address import Balance, ClaimData, Coin, TransferIntent
from ..types.common import Amount, AssetId, Fixed8, ScriptHash, TxId
from ..types.transaction import (
    ClaimTransaction,
    ContractTransaction,
    InvocationTransaction,
    Transaction,
    TransactionAttribute,
    TransactionAttributeUsage,
    TransactionInput,
    TransactionOutput,
    TransactionType,
)
from ..utils.encoding import decode_address, hex_to_bytes, to_fixed8
from ..utils.validation import validate_amount, validate_asset_id

if TYPE_CHECKING:
    from ..modules.account import Account

__all__ = [
    "make_intent",
    "make_intents",
    "calculate_inputs",
    "build_claim_tx",
    "build_contract_tx",
    "build_invocation_tx",
    "build_transaction",
]

logger = logging.getLogger(__name__)

BalanceLike = Union[Balance, Mapping[str, Any]]
ClaimDataLike = Union[ClaimData, Mapping[str, Any]]


def _resolve_asset_id(asset: str) -> AssetId:
    """Accept an asset symbol ("NEO", "GAS") or an asset id."""
    if asset in ASSETS:
        return AssetId(ASSETS[asset])
    return validate_asset_id(asset)


def _as_balance(balances: BalanceLike) -> Balance:
    if isinstance(balances, Balance):
        return balances
    return Balance.from_dict(balances)


def _as_claim_data(claim_data: ClaimDataLike) -> ClaimData:
    if isinstance(claim_data, ClaimData):
        return claim_data
    return ClaimData.from_dict(claim_data)


def make_intent(
    asset: str,
    value: Amount,
    recipient: Union[str, bytes],
    address_version: Optional[int] = None
) -> TransferIntent:
    """
    Create a transfer intent.

    Args:
        asset: Asset symbol or asset id
        value: Amount in whole asset units
        recipient: Recipient address, or 20-byte script hash
        address_version: Address version byte used to decode an address

    Returns:
        TransferIntent
    """
    if isinstance(recipient, str):
        if address_version is None:
            script_hash = decode_address(recipient)
        else:
            script_hash = decode_address(recipient, address_version)
    else:
        if len(recipient) != 20:
            raise ValidationError(f"Script hash must be 20 bytes, got {len(recipient)}")
        script_hash = ScriptHash(bytes(recipient))

    return TransferIntent(
        asset_id=_resolve_asset_id(asset),
        value=validate_amount(value),
        script_hash=script_hash,
    )


def make_intents(
    asset_amounts: Mapping[str, Amount],
    recipient: Union[str, bytes],
    address_version: Optional[int] = None
) -> List[TransferIntent]:
    """Create one intent per asset, e.g. {"NEO": 1, "GAS": "0.5"}."""
    return [
        make_intent(asset, value, recipient, address_version)
        for asset, value in asset_amounts.items()
    ]


def calculate_inputs(
    script_hash: ScriptHash,
    balances: BalanceLike,
    intents: Optional[Sequence[TransferIntent]] = None,
    gas_cost: Fixed8 = Fixed8(0)
) -> Tuple[List[TransactionInput], List[TransactionOutput]]:
    """
    Select coins covering the intents and compute change.

    Per asset, the required amount (intents plus gas_cost for GAS) is
    checked against the reported balance before any coin is picked.
    Coins are then taken smallest first until the amount is covered,
    and any surplus goes back to script_hash as a change output.

    Args:
        script_hash: Sender's script hash, receives change
        balances: Sender's balance
        intents: Outputs to fund
        gas_cost: GAS attached to an invocation, Fixed8 units

    Returns:
        (inputs, change outputs)

    Raises:
        InsufficientFundsError: If an asset cannot be covered
    """
    balance = _as_balance(balances)

    required: Dict[str, int] = {}
    for intent in intents or []:
        required[intent.asset_id] = required.get(intent.asset_id, 0) + to_fixed8(intent.value)
    if gas_cost > 0:
        required[GAS_ASSET_ID] = required.get(GAS_ASSET_ID, 0) + gas_cost

    for asset_id, required_amount in required.items():
        asset_balance = balance.get(asset_id)
        available = to_fixed8(asset_balance.balance) if asset_balance else 0
        if available < required_amount:
            raise InsufficientFundsError(asset_id, required_amount, available)

    inputs: List[TransactionInput] = []
    change: List[TransactionOutput] = []

    for asset_id, required_amount in required.items():
        asset_balance = balance.get(asset_id)
        coins: List[Coin] = sorted(asset_balance.unspent, key=lambda coin: coin.value)
        selected = 0
        count = 0
        while selected < required_amount:
            if count >= len(coins):
                raise InsufficientFundsError(
                    asset_id,
                    required_amount,
                    selected,
                    f"Insufficient funds for asset {asset_id}: "
                    f"reached end of unspent coins",
                )
            selected += to_fixed8(coins[count].value)
            count += 1

        inputs.extend(
            TransactionInput(prev_hash=TxId(coin.txid), prev_index=coin.index)
            for coin in coins[:count]
        )
        if selected > required_amount:
            change.append(TransactionOutput(
                asset_id=AssetId(asset_id),
                value=Fixed8(selected - required_amount),
                script_hash=script_hash,
            ))

    return inputs, change


def _intent_outputs(intents: Sequence[TransferIntent]) -> List[TransactionOutput]:
    return [
        TransactionOutput(
            asset_id=intent.asset_id,
            value=to_fixed8(intent.value),
            script_hash=intent.script_hash,
        )
        for intent in intents
    ]


def build_claim_tx(
    account: "Account",
    claim_data: ClaimDataLike,
    version: Optional[int] = None,
    attributes: Optional[List[TransactionAttribute]] = None
) -> ClaimTransaction:
    """
    Build a GAS claim transaction.

    At most 255 claims are included; the total goes to the account in a
    single GAS output.

    Args:
        account: Claiming account
        claim_data: Claimable outputs for the account's address
        version: Transaction version override
        attributes: Extra attributes

    Returns:
        Unsigned ClaimTransaction

    Raises:
        TransactionError: If there is nothing to claim or the claim data
            belongs to another address
    """
    data = _as_claim_data(claim_data)
    if data.address != account.address:
        raise TransactionError(
            f"Claim data is for {data.address}, not {account.address}"
        )
    if not data.claims:
        raise TransactionError(f"No claimable GAS for {account.address}")

    claims = data.claims[:MAX_CLAIMS]
    if len(data.claims) > MAX_CLAIMS:
        logger.warning(
            f"Dropping {len(data.claims) - MAX_CLAIMS} claims beyond the "
            f"{MAX_CLAIMS} per transaction limit"
        )

    total = sum(claim.claim for claim in claims)
    tx = ClaimTransaction(
        version=TX_VERSION["CLAIM"] if version is None else version,
        attributes=list(attributes or []),
        claims=[
            TransactionInput(prev_hash=claim.txid, prev_index=claim.index)
            for claim in claims
        ],
        outputs=[TransactionOutput(
            asset_id=AssetId(GAS_ASSET_ID),
            value=Fixed8(total),
            script_hash=account.script_hash,
        )],
    )
    logger.debug(f"Built claim transaction: {len(claims)} claims, {total} Fixed8 GAS")
    return tx


def build_contract_tx(
    account: "Account",
    balances: BalanceLike,
    intents: Sequence[TransferIntent],
    version: Optional[int] = None,
    attributes: Optional[List[TransactionAttribute]] = None
) -> ContractTransaction:
    """
    Build an asset transfer.

    Args:
        account: Sending account
        balances: Sender's balance
        intents: Transfers to make
        version: Transaction version override
        attributes: Extra attributes

    Returns:
        Unsigned ContractTransaction

    Raises:
        TransactionError: If there are no intents
        InsufficientFundsError: If balances do not cover the intents
    """
    if not intents:
        raise TransactionError("Contract transaction needs at least one intent")

    inputs, change = calculate_inputs(account.script_hash, balances, intents)
    tx = ContractTransaction(
        version=TX_VERSION["CONTRACT"] if version is None else version,
        attributes=list(attributes or []),
        inputs=inputs,
        outputs=_intent_outputs(intents) + change,
    )
    logger.debug(
        f"Built contract transaction: {len(inputs)} inputs, {len(tx.outputs)} outputs"
    )
    return tx


def build_invocation_tx(
    account: "Account",
    balances: Optional[BalanceLike],
    intents: Optional[Sequence[TransferIntent]],
    script: Union[bytes, str],
    gas_cost: Amount = 0,
    version: Optional[int] = None,
    attributes: Optional[List[TransactionAttribute]] = None
) -> InvocationTransaction:
    """
    Build a smart contract invocation.

    The GAS cost is rounded up to whole GAS and funded from the sender's
    GAS coins together with any intents. When no coins are spent the
    account's script hash is attached as a SCRIPT attribute, so the
    account's verification script still runs.

    Args:
        account: Invoking account
        balances: Sender's balance; may be None when nothing is spent
        intents: Transfers to make alongside the invocation
        script: Invocation bytecode, bytes or hex
        gas_cost: GAS to attach, in whole units
        version: Transaction version override (defaults to the
            account profile's invocation version)
        attributes: Extra attributes

    Returns:
        Unsigned InvocationTransaction

    Raises:
        InsufficientFundsError: If balances do not cover intents and gas
        ValidationError: If gas_cost is negative or not numeric
    """
    intents = list(intents or [])
    script_bytes = hex_to_bytes(script) if isinstance(script, str) else bytes(script)
    gas = fixed8_gas_ceil(to_fixed8(validate_amount(gas_cost)))

    if intents or gas > 0:
        if balances is None:
            raise TransactionError("Balances are required to fund intents or gas")
        inputs, change = calculate_inputs(account.script_hash, balances, intents, gas)
    else:
        inputs, change = [], []

    attributes = list(attributes or [])
    if not inputs and not any(
        attr.usage == TransactionAttributeUsage.SCRIPT for attr in attributes
    ):
        attributes.append(TransactionAttribute(
            usage=TransactionAttributeUsage.SCRIPT,
            data=bytes(account.script_hash),
        ))

    if version is None:
        profile = getattr(account, "profile", None)
        version = profile.invocation_version if profile else TX_VERSION["INVOCATION"]

    tx = InvocationTransaction(
        version=version,
        attributes=attributes,
        inputs=inputs,
        outputs=_intent_outputs(intents) + change,
        script=script_bytes,
        gas=gas,
    )
    logger.debug(
        f"Built invocation transaction: script {len(script_bytes)} bytes, "
        f"gas {gas} Fixed8, {len(inputs)} inputs"
    )
    return tx


def build_transaction(
    kind: Union[TransactionType, int, str],
    account: "Account",
    balances: Optional[BalanceLike] = None,
    intents: Optional[Sequence[TransferIntent]] = None,
    script: Optional[Union[bytes, str]] = None,
    gas_cost: Amount = 0,
    claim_data: Optional[ClaimDataLike] = None,
    version: Optional[int] = None,
    attributes: Optional[List[TransactionAttribute]] = None
) -> Transaction:
    """
    Build an unsigned transaction of the given kind.

    Args:
        kind: TransactionType, its wire byte, or its name ("invocation")
        account: Sending account
        balances: Sender's balance (contract and invocation)
        intents: Transfers to make (contract and invocation)
        script: Invocation bytecode (invocation)
        gas_cost: GAS to attach, whole units (invocation)
        claim_data: Claimable outputs (claim)
        version: Transaction version override
        attributes: Extra attributes

    Returns:
        Unsigned transaction

    Raises:
        UnsupportedTransactionKindError: If kind is not claim, contract
            or invocation
        TransactionError: If a required argument is missing
    """
    try:
        if isinstance(kind, str):
            kind = TransactionType[kind.upper()]
        else:
            kind = TransactionType(kind)
    except (KeyError, ValueError) as e:
        raise UnsupportedTransactionKindError(
            kind if isinstance(kind, int) else -1,
            f"Unsupported transaction type: {kind!r}",
        ) from e

    if kind == TransactionType.CLAIM:
        if claim_data is None:
            raise TransactionError("Claim transaction needs claim data")
        return build_claim_tx(account, claim_data, version, attributes)

    if kind == TransactionType.CONTRACT:
        if balances is None:
            raise TransactionError("Contract transaction needs balances")
        return build_contract_tx(account, balances, intents or [], version, attributes)

    if script is None:
        raise TransactionError("Invocation transaction needs a script")
    return build_invocation_tx(
        account, balances, intents, script, gas_cost, version, attributes
    )
