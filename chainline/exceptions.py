"""ChainLine wallet exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "ChainLineError",
    "ValidationError",
    "MalformedInputError",
    "MalformedLengthError",
    "ChecksumMismatchError",
    "InvalidWIFError",
    "AddressError",
    "CryptoError",
    "InvalidSignatureError",
    "InvalidPublicKeyError",
    "TransactionError",
    "InsufficientFundsError",
    "UnsupportedTransactionKindError",
    "SerializationError",
    "WalletError",
]


class ChainLineError(Exception):
    """Base exception for all ChainLine wallet errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(ChainLineError):
    """Raised when validation fails."""
    pass


class MalformedInputError(ValidationError):
    """Raised when decoded input has the wrong length, prefix or shape."""
    pass


class MalformedLengthError(MalformedInputError):
    """Raised when a length prefix is truncated or inconsistent."""
    pass


class ChecksumMismatchError(ValidationError):
    """Raised when a base58-check checksum does not match its payload."""
    pass


class InvalidWIFError(MalformedInputError):
    """Raised when a WIF string cannot be decoded into a private key."""
    pass


class AddressError(MalformedInputError):
    """Raised when address operation fails."""
    pass


class CryptoError(ChainLineError):
    """Raised when cryptographic operation fails."""
    pass


class InvalidSignatureError(CryptoError):
    """Raised when a signature or curve point fails verification."""
    pass


class InvalidPublicKeyError(MalformedInputError, InvalidSignatureError):
    """Raised when a public key is not a valid compressed curve point."""
    pass


class TransactionError(ChainLineError):
    """Raised when transaction operation fails."""
    pass


class InsufficientFundsError(TransactionError):
    """Raised when balances cannot cover the requested intents."""

    def __init__(
        self,
        asset_id: str,
        required: int,
        available: int,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = (
                f"Insufficient funds for asset {asset_id}: "
                f"required {required} Fixed8 units, available {available}"
            )
        super().__init__(message)
        self.asset_id = asset_id
        self.required = required
        self.available = available


class UnsupportedTransactionKindError(TransactionError):
    """Raised when a transaction type byte is not supported."""

    def __init__(self, kind: int, message: Optional[str] = None) -> None:
        if message is None:
            message = f"Unsupported transaction type: {kind:#04x}"
        super().__init__(message)
        self.kind = kind


class SerializationError(ChainLineError):
    """Raised when serialization/deserialization fails."""
    pass


class WalletError(ChainLineError):
    """Raised when wallet operation fails."""
    pass
