"""Type definitions for the ChainLine wallet."""

# Common types
from ..types.common import (
    HexStr,
    Fixed8,
    TxId,
    AssetId,
    Address,
    ScriptHash,
    PrivateKeyBytes,
    PublicKeyBytes,
    Signature,
    Amount,
)

# Transaction types
from ..types.transaction import (
    TransactionType,
    TransactionAttributeUsage,
    TransactionAttribute,
    TransactionInput,
    TransactionOutput,
    Witness,
    Transaction,
    ClaimTransaction,
    ContractTransaction,
    InvocationTransaction,
)

# Balance types
from ..types.address import (
    Coin,
    AssetBalance,
    Balance,
    TransferIntent,
    ClaimItem,
    ClaimData,
)

__all__ = [
    # Common
    "HexStr",
    "Fixed8",
    "TxId",
    "AssetId",
    "Address",
    "ScriptHash",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Signature",
    "Amount",

    # Transaction
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

    # Balance
    "Coin",
    "AssetBalance",
    "Balance",
    "TransferIntent",
    "ClaimItem",
    "ClaimData",
]
