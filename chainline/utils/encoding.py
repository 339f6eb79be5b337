"""Encoding and decoding utilities for the ChainLine wallet."""

import hashlib
import struct
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Tuple, Union, Optional

import base58

from ..constants import (
    ADDRESS_VERSION,
    FIXED8_FACTOR,
    FIXED8_MAX,
    FIXED8_MIN,
    MAX_SCRIPT_SIZE,
)
from ..exceptions import (
    AddressError,
    ChecksumMismatchError,
    MalformedInputError,
    MalformedLengthError,
    SerializationError,
    ValidationError,
)
from ..types.common import Address, Amount, Fixed8, HexStr, ScriptHash

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "reverse_hex",
    "encode_varint",
    "decode_varint",
    "encode_var_bytes",
    "to_fixed8",
    "from_fixed8",
    "encode_fixed8",
    "decode_fixed8",
    "sha256",
    "double_sha256",
    "hash160",
    "encode_base58",
    "decode_base58",
    "encode_base58_check",
    "decode_base58_check",
    "encode_address",
    "decode_address",
    "ByteReader",
]

MAX_UINT64 = 0xFFFFFFFFFFFFFFFF


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = bytes(data).hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def reverse_hex(hex_str: Union[HexStr, str]) -> HexStr:
    """
    Reverse the byte order of a hex string.

    Used to switch between the little-endian wire order and the
    big-endian display order of hashes.

    Raises:
        ValidationError: If hex string is invalid
    """
    return bytes_to_hex(hex_to_bytes(hex_str)[::-1])


def encode_varint(n: int) -> bytes:
    """
    Encode integer as a variable length integer.

    Args:
        n: Integer to encode

    Returns:
        Encoded varint bytes

    Raises:
        SerializationError: If n is negative or exceeds 64 bits
    """
    if n < 0 or n > MAX_UINT64:
        raise SerializationError(f"VarInt out of range: {n}")
    if n < 0xfd:
        return bytes([n])
    elif n <= 0xffff:
        return b"\xfd" + struct.pack("<H", n)
    elif n <= 0xffffffff:
        return b"\xfe" + struct.pack("<I", n)
    else:
        return b"\xff" + struct.pack("<Q", n)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode variable length integer.

    Args:
        data: Bytes containing varint
        offset: Starting position

    Returns:
        Tuple of (value, new_offset)

    Raises:
        MalformedLengthError: If the varint is truncated or not minimally encoded
    """
    if offset >= len(data):
        raise MalformedLengthError("VarInt truncated: no marker byte")

    marker = data[offset]
    if marker < 0xfd:
        return marker, offset + 1

    if marker == 0xfd:
        fmt, size, minimum = "<H", 2, 0xfd
    elif marker == 0xfe:
        fmt, size, minimum = "<I", 4, 0x10000
    else:
        fmt, size, minimum = "<Q", 8, 0x100000000

    if offset + 1 + size > len(data):
        raise MalformedLengthError(
            f"VarInt truncated: marker {marker:#04x} needs {size} bytes"
        )
    value = struct.unpack_from(fmt, data, offset + 1)[0]
    if value < minimum:
        raise MalformedLengthError(
            f"VarInt not minimally encoded: {value} behind marker {marker:#04x}"
        )
    return value, offset + 1 + size


def encode_var_bytes(data: bytes) -> bytes:
    """Encode bytes with a VarInt length prefix."""
    return encode_varint(len(data)) + bytes(data)


def to_fixed8(value: Amount) -> Fixed8:
    """
    Convert an amount in whole asset units to Fixed8.

    Floats are converted through their shortest repr so that 0.1
    becomes exactly 10000000. Rounds half up.

    Args:
        value: Amount as Decimal, int, float or numeric string

    Returns:
        Scaled integer amount

    Raises:
        ValidationError: If value is not numeric
        SerializationError: If the scaled value overflows 64 bits
    """
    try:
        if isinstance(value, float):
            value = str(value)
        scaled = (Decimal(value) * FIXED8_FACTOR).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValidationError(f"Invalid amount: {value!r}") from e

    result = int(scaled)
    if not FIXED8_MIN <= result <= FIXED8_MAX:
        raise SerializationError(f"Amount overflows Fixed8: {value}")
    return Fixed8(result)


def from_fixed8(value: int) -> Decimal:
    """Convert Fixed8 integer to a Decimal in whole asset units."""
    return Decimal(value) / FIXED8_FACTOR


def encode_fixed8(value: int) -> bytes:
    """
    Encode Fixed8 integer as signed 64-bit little-endian.

    Raises:
        SerializationError: If value overflows 64 bits
    """
    try:
        return struct.pack("<q", value)
    except struct.error as e:
        raise SerializationError(f"Fixed8 value out of range: {value}") from e


def decode_fixed8(data: bytes) -> Fixed8:
    """Decode signed 64-bit little-endian Fixed8."""
    if len(data) != 8:
        raise MalformedInputError(f"Fixed8 must be 8 bytes, got {len(data)}")
    return Fixed8(struct.unpack("<q", data)[0])


def sha256(data: bytes) -> bytes:
    """Perform single SHA256 hash."""
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """Perform double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    sha256_hash = hashlib.sha256(data).digest()
    return hashlib.new("ripemd160", sha256_hash).digest()


def encode_base58(data: bytes) -> str:
    """Encode bytes as Base58 string."""
    return base58.b58encode(bytes(data)).decode("ascii")


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Raises:
        MalformedInputError: If string contains invalid characters
    """
    try:
        return base58.b58decode(string)
    except ValueError as e:
        raise MalformedInputError(f"Invalid Base58 string: {e}") from e


def encode_base58_check(version: int, data: bytes) -> str:
    """
    Encode version byte and payload as Base58Check.

    Args:
        version: Single version byte
        data: Payload bytes

    Returns:
        Base58Check encoded string
    """
    payload = bytes([version]) + bytes(data)
    checksum = double_sha256(payload)[:4]
    return encode_base58(payload + checksum)


def decode_base58_check(
    string: str,
    expected_length: Optional[int] = None
) -> bytes:
    """
    Decode Base58Check string.

    Args:
        string: Base58Check string
        expected_length: Required decoded length, checksum included

    Returns:
        Decoded payload (version byte included, checksum removed)

    Raises:
        MalformedInputError: If the decoded length is wrong
        ChecksumMismatchError: If checksum is invalid
    """
    data = decode_base58(string)
    if expected_length is not None and len(data) != expected_length:
        raise MalformedInputError(
            f"Invalid Base58Check length: expected {expected_length}, got {len(data)}"
        )
    if len(data) < 5:
        raise MalformedInputError("Invalid Base58Check string: too short")

    payload, checksum = data[:-4], data[-4:]
    if checksum != double_sha256(payload)[:4]:
        raise ChecksumMismatchError("Invalid Base58Check checksum")

    return payload


def encode_address(
    script_hash: bytes,
    version: int = ADDRESS_VERSION
) -> Address:
    """
    Encode a script hash as a base58-check address.

    Args:
        script_hash: 20-byte script hash in wire order
        version: Address version byte

    Returns:
        Encoded address

    Raises:
        AddressError: If the script hash is not 20 bytes
    """
    if len(script_hash) != 20:
        raise AddressError(f"Script hash must be 20 bytes, got {len(script_hash)}")
    return Address(encode_base58_check(version, script_hash))


def decode_address(
    address: str,
    version: int = ADDRESS_VERSION
) -> ScriptHash:
    """
    Decode a base58-check address to its script hash.

    Args:
        address: Address string
        version: Expected address version byte

    Returns:
        20-byte script hash in wire order

    Raises:
        AddressError: If the address has the wrong length or version
        ChecksumMismatchError: If the checksum is invalid
    """
    try:
        payload = decode_base58_check(address, expected_length=25)
    except ChecksumMismatchError:
        raise
    except MalformedInputError as e:
        raise AddressError(f"Invalid address {address!r}: {e}") from e

    if payload[0] != version:
        raise AddressError(
            f"Unknown address version: {payload[0]:#04x}, expected {version:#04x}"
        )
    return ScriptHash(payload[1:])


class ByteReader:
    """
    Sequential reader over serialized wire data.

    Every read is bounds-checked; running past the end raises
    MalformedInputError instead of returning short data.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def is_empty(self) -> bool:
        return self._offset >= len(self._data)

    def read(self, length: int) -> bytes:
        if length < 0 or length > self.remaining:
            raise MalformedInputError(
                f"Unexpected end of data: wanted {length} bytes at offset "
                f"{self._offset}, {self.remaining} left"
            )
        chunk = self._data[self._offset:self._offset + length]
        self._offset += length
        return chunk

    def read_uint8(self) -> int:
        return self.read(1)[0]

    def read_uint16(self) -> int:
        return struct.unpack("<H", self.read(2))[0]

    def read_uint32(self) -> int:
        return struct.unpack("<I", self.read(4))[0]

    def read_uint64(self) -> int:
        return struct.unpack("<Q", self.read(8))[0]

    def read_int64(self) -> int:
        return struct.unpack("<q", self.read(8))[0]

    def read_fixed8(self) -> Fixed8:
        return decode_fixed8(self.read(8))

    def read_varint(self, max_value: int = MAX_UINT64) -> int:
        value, self._offset = decode_varint(self._data, self._offset)
        if value > max_value:
            raise MalformedLengthError(f"VarInt {value} exceeds maximum {max_value}")
        return value

    def read_var_bytes(self, max_length: int = MAX_SCRIPT_SIZE) -> bytes:
        length = self.read_varint(max_length)
        if length > self.remaining:
            raise MalformedLengthError(
                f"Length prefix {length} exceeds remaining {self.remaining} bytes"
            )
        return self.read(length)
