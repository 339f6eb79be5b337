"""Cryptographic utilities for the ChainLine wallet."""

from ..crypto.keys import PrivateKey, PublicKey, encode_wif, decode_wif
from ..crypto.signature import (
    sign_data,
    verify_data,
    encode_invocation_script,
    decode_invocation_script,
    parse_signature,
    encode_signature,
)
from ..crypto.transaction_signing import (
    sign_transaction,
    verify_transaction_witness,
    get_transaction_hash,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    "encode_wif",
    "decode_wif",

    # Signatures
    "sign_data",
    "verify_data",
    "encode_invocation_script",
    "decode_invocation_script",
    "parse_signature",
    "encode_signature",

    # Transactions
    "sign_transaction",
    "verify_transaction_witness",
    "get_transaction_hash",
]
