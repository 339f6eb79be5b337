"""Validation utilities for the ChainLine wallet."""

import re
from typing import Union
from decimal import Decimal

from ..constants import ADDRESS_VERSION, SECP256R1_ORDER
from ..exceptions import (
    ChecksumMismatchError,
    InvalidPublicKeyError,
    MalformedInputError,
    SerializationError,
    ValidationError,
)
from ..types.common import Address, Amount, AssetId, ScriptHash, TxId
from ..utils.encoding import decode_address, encode_address, from_fixed8, to_fixed8

__all__ = [
    "is_valid_address",
    "validate_address",
    "is_valid_txid",
    "validate_txid",
    "validate_asset_id",
    "is_valid_script_hash",
    "validate_script_hash",
    "is_valid_amount",
    "validate_amount",
    "is_valid_private_key",
    "validate_private_key",
    "validate_public_key",
    "is_hex",
]

# Regex patterns
HASH256_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")
HASH160_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")
HEX_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{2})*$")


def _strip_prefix(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def is_hex(value: str) -> bool:
    """Check if string is an even-length hex string."""
    return bool(HEX_PATTERN.match(_strip_prefix(value)))


def is_valid_address(address: str, version: int = ADDRESS_VERSION) -> bool:
    """
    Check if address format is valid.

    The script hash is re-encoded and compared, so strings from chains
    sharing the checksum scheme but not the version byte are rejected.

    Args:
        address: Address to validate
        version: Address version byte

    Returns:
        True if valid, False otherwise
    """
    try:
        script_hash = decode_address(address, version)
    except (MalformedInputError, ChecksumMismatchError):
        return False
    return encode_address(script_hash, version) == address


def validate_address(address: str, version: int = ADDRESS_VERSION) -> Address:
    """
    Validate address and return it.

    Raises:
        ValidationError: If address is invalid
    """
    if not address:
        raise ValidationError("Address cannot be empty")
    if not is_valid_address(address, version):
        raise ValidationError(f"Invalid address: {address}")
    return Address(address)


def is_valid_txid(txid: str) -> bool:
    """Check if transaction ID format is valid."""
    return bool(HASH256_PATTERN.match(_strip_prefix(txid)))


def validate_txid(txid: str) -> TxId:
    """
    Validate transaction ID and return normalized form.

    Returns:
        Normalized txid (lowercase, no 0x prefix)

    Raises:
        ValidationError: If txid is invalid
    """
    if not isinstance(txid, str) or not is_valid_txid(txid):
        raise ValidationError(f"Invalid transaction ID: {txid}")
    return TxId(_strip_prefix(txid).lower())


def validate_asset_id(asset_id: str) -> AssetId:
    """
    Validate asset ID and return normalized form.

    Raises:
        ValidationError: If asset id is not 32 bytes of hex
    """
    if not isinstance(asset_id, str) or not HASH256_PATTERN.match(_strip_prefix(asset_id)):
        raise ValidationError(f"Invalid asset ID: {asset_id}")
    return AssetId(_strip_prefix(asset_id).lower())


def is_valid_script_hash(script_hash: Union[str, bytes]) -> bool:
    """Check if value is a 20-byte script hash (bytes or 40 hex chars)."""
    if isinstance(script_hash, (bytes, bytearray)):
        return len(script_hash) == 20
    if isinstance(script_hash, str):
        return bool(HASH160_PATTERN.match(_strip_prefix(script_hash)))
    return False


def validate_script_hash(script_hash: Union[str, bytes]) -> ScriptHash:
    """
    Validate script hash and return it as wire-order bytes.

    Hex strings are taken to be in big-endian display order, as shown
    by explorers and RPC nodes, and are reversed.

    Raises:
        ValidationError: If script hash is invalid
    """
    if not is_valid_script_hash(script_hash):
        raise ValidationError(f"Invalid script hash: {script_hash!r}")
    if isinstance(script_hash, str):
        return ScriptHash(bytes.fromhex(_strip_prefix(script_hash))[::-1])
    return ScriptHash(bytes(script_hash))


def is_valid_amount(amount: Amount) -> bool:
    """Check if amount converts to a non-negative Fixed8."""
    try:
        return to_fixed8(amount) >= 0
    except (ValidationError, SerializationError):
        return False


def validate_amount(amount: Amount) -> Decimal:
    """
    Validate amount and return it rounded to Fixed8 precision.

    Raises:
        ValidationError: If amount is negative or not numeric
    """
    fixed8 = to_fixed8(amount)
    if fixed8 < 0:
        raise ValidationError(f"Amount cannot be negative: {amount}")
    return from_fixed8(fixed8)


def is_valid_private_key(key: Union[str, bytes]) -> bool:
    """
    Check if private key is valid.

    Args:
        key: Private key as hex string or bytes

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_private_key(key)
        return True
    except ValidationError:
        return False


def validate_private_key(key: Union[str, bytes]) -> bytes:
    """
    Validate private key and return as bytes.

    Args:
        key: Private key as hex string or bytes

    Returns:
        Private key as 32 bytes

    Raises:
        ValidationError: If private key is invalid
    """
    if isinstance(key, str):
        key = _strip_prefix(key)
        if not HEX_PATTERN.match(key):
            raise ValidationError("Private key must be hexadecimal")
        key = bytes.fromhex(key)

    if not isinstance(key, (bytes, bytearray)):
        raise ValidationError(f"Unsupported private key type: {type(key).__name__}")

    if len(key) != 32:
        raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")

    # Check if within valid range (1 to n-1)
    key_int = int.from_bytes(key, "big")
    if not 0 < key_int < SECP256R1_ORDER:
        raise ValidationError("Private key out of range for secp256r1")

    return bytes(key)


def validate_public_key(key: Union[str, bytes]) -> bytes:
    """
    Validate public key encoding and return as bytes.

    Only the shape is checked here; the curve point itself is checked
    when a PublicKey is built.

    Args:
        key: Public key as hex string or bytes

    Returns:
        Public key bytes (33 compressed or 65 uncompressed)

    Raises:
        InvalidPublicKeyError: If the length or prefix is wrong
    """
    if isinstance(key, str):
        key = _strip_prefix(key)
        if not HEX_PATTERN.match(key):
            raise InvalidPublicKeyError("Public key must be hexadecimal")
        key = bytes.fromhex(key)

    if not isinstance(key, (bytes, bytearray)):
        raise InvalidPublicKeyError(f"Unsupported public key type: {type(key).__name__}")

    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise InvalidPublicKeyError(
                f"Invalid compressed public key prefix: {key[0]:#04x}"
            )
    elif len(key) == 65:
        if key[0] != 0x04:
            raise InvalidPublicKeyError(
                f"Invalid uncompressed public key prefix: {key[0]:#04x}"
            )
    else:
        raise InvalidPublicKeyError(f"Invalid public key length: {len(key)}")

    return bytes(key)
