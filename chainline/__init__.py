"""
ChainLine Wallet Core

Client-side key management, wallet scripts and transaction construction
for the ChainLine hub contract on NEO-family ledgers.
"""

from .client import ChainLine
from .constants import Network
from .exceptions import (
    ChainLineError,
    ValidationError,
    MalformedInputError,
    ChecksumMismatchError,
    InvalidWIFError,
    CryptoError,
    InvalidSignatureError,
    InvalidPublicKeyError,
    TransactionError,
    InsufficientFundsError,
    UnsupportedTransactionKindError,
    SerializationError,
    WalletError,
)
from .crypto import PrivateKey, PublicKey, sign_transaction, get_transaction_hash
from .modules import Account, Wallet, derive_account
from .profile import (
    ProtocolProfile,
    LEGACY_PROFILE,
    CURRENT_PROFILE,
    SIGNATURE_PROFILE,
    DEFAULT_PROFILE,
)
from .sc import ScriptBuilder, build_invocation_script
from .transactions import build_transaction, serialize_transaction, deserialize_transaction
from .types import (
    Transaction,
    ClaimTransaction,
    ContractTransaction,
    InvocationTransaction,
    TransactionType,
)

__version__ = "1.0.0"

__all__ = [
    # Main client
    "ChainLine",

    # Network
    "Network",

    # Exceptions
    "ChainLineError",
    "ValidationError",
    "MalformedInputError",
    "ChecksumMismatchError",
    "InvalidWIFError",
    "CryptoError",
    "InvalidSignatureError",
    "InvalidPublicKeyError",
    "TransactionError",
    "InsufficientFundsError",
    "UnsupportedTransactionKindError",
    "SerializationError",
    "WalletError",

    # Crypto
    "PrivateKey",
    "PublicKey",
    "sign_transaction",
    "get_transaction_hash",

    # Accounts
    "Account",
    "Wallet",
    "derive_account",

    # Profiles
    "ProtocolProfile",
    "LEGACY_PROFILE",
    "CURRENT_PROFILE",
    "SIGNATURE_PROFILE",
    "DEFAULT_PROFILE",

    # Scripts
    "ScriptBuilder",
    "build_invocation_script",

    # Transactions
    "build_transaction",
    "serialize_transaction",
    "deserialize_transaction",
    "Transaction",
    "ClaimTransaction",
    "ContractTransaction",
    "InvocationTransaction",
    "TransactionType",
]
