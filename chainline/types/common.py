"""Common type definitions for the ChainLine wallet."""

from typing import NewType, Union
from decimal import Decimal

__all__ = [
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
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

Fixed8 = NewType("Fixed8", int)
"""Amount scaled by 10^8 and stored as a signed 64-bit integer."""

# Identifiers
TxId = NewType("TxId", str)
"""Transaction ID (hash), big-endian display hex."""

AssetId = NewType("AssetId", str)
"""Asset ID, big-endian display hex."""

Address = NewType("Address", str)
"""Base58-check address string."""

ScriptHash = NewType("ScriptHash", bytes)
"""20-byte RIPEMD160(SHA256(script)), in wire order."""

# Crypto types
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33-byte compressed public key."""

Signature = NewType("Signature", bytes)
"""64-byte raw r || s signature."""

# Type aliases
Amount = Union[Decimal, int, float, str]
"""Amount in whole asset units that can be converted to Fixed8."""
