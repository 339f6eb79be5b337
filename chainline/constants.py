"""Protocol constants for the ChainLine wallet core."""

from enum import Enum

__all__ = [
    "Network",
    "ASSETS",
    "ASSET_IDS",
    "NEO_ASSET_ID",
    "GAS_ASSET_ID",
    "ADDRESS_VERSION",
    "WIF_VERSION",
    "WIF_COMPRESSED_FLAG",
    "FIXED8_DECIMALS",
    "FIXED8_FACTOR",
    "FIXED8_MAX",
    "FIXED8_MIN",
    "MAX_CLAIMS",
    "MAX_TRANSACTION_ATTRIBUTE_SIZE",
    "MAX_SCRIPT_SIZE",
    "TX_VERSION",
    "SIGNATURE_PUSH",
    "SECP256R1_ORDER",
]


class Network(str, Enum):
    """Ledger networks."""
    MAINNET = "MainNet"
    TESTNET = "TestNet"


# Native asset ids, big-endian display order
NEO_ASSET_ID = "c56f33fc6ecfcd0c225c4ab356fee59390af8560be0e930faebe74a6daff7c9b"
GAS_ASSET_ID = "602c79718b16e442de58778e148d0b1084e3b2dffd5de6b7b16cee7969282de7"

ASSETS = {
    "NEO": NEO_ASSET_ID,
    "GAS": GAS_ASSET_ID,
}

ASSET_IDS = {asset_id: symbol for symbol, asset_id in ASSETS.items()}

# Address and key encoding
ADDRESS_VERSION = 0x17
WIF_VERSION = 0x80
WIF_COMPRESSED_FLAG = 0x01

# Fixed8 amounts
FIXED8_DECIMALS = 8
FIXED8_FACTOR = 10 ** FIXED8_DECIMALS
FIXED8_MAX = 2 ** 63 - 1
FIXED8_MIN = -(2 ** 63)

# Transaction limits
MAX_CLAIMS = 255
MAX_TRANSACTION_ATTRIBUTE_SIZE = 65535
MAX_SCRIPT_SIZE = 0x1000000

# Default version byte per transaction kind
TX_VERSION = {
    "CLAIM": 0,
    "CONTRACT": 0,
    "INVOCATION": 1,
}

# Invocation scripts start with PUSHBYTES64
SIGNATURE_PUSH = 0x40

# secp256r1 (NIST P-256) group order
SECP256R1_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
