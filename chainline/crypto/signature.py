"""Signature utilities for the ChainLine wallet."""

from typing import Tuple

from ..constants import SIGNATURE_PUSH
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import InvalidSignatureError
from ..types.common import Signature
from ..utils.encoding import sha256

__all__ = [
    "sign_data",
    "verify_data",
    "encode_invocation_script",
    "decode_invocation_script",
    "parse_signature",
    "encode_signature",
]

SIGNATURE_LENGTH = 64


def sign_data(
    private_key: PrivateKey,
    data: bytes,
    deterministic: bool = True
) -> Signature:
    """
    Sign data with the ledger's signing convention.

    The data is hashed once with SHA256 and the digest is signed.

    Args:
        private_key: Private key to sign with
        data: Raw bytes to sign, usually an unsigned transaction
        deterministic: Use RFC 6979 deterministic nonces

    Returns:
        64-byte raw r || s signature
    """
    return private_key.sign(sha256(data), deterministic=deterministic)


def verify_data(public_key: PublicKey, signature: bytes, data: bytes) -> bool:
    """
    Verify a signature made by sign_data.

    Returns:
        True if signature is valid
    """
    return public_key.verify(signature, sha256(data))


def encode_invocation_script(signature: bytes) -> bytes:
    """
    Wrap a signature as a witness invocation script (PUSHBYTES64 sig).

    Raises:
        InvalidSignatureError: If signature is not 64 bytes
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    return bytes([SIGNATURE_PUSH]) + bytes(signature)


def decode_invocation_script(script: bytes) -> Signature:
    """
    Extract the signature from a single-signature invocation script.

    Raises:
        InvalidSignatureError: If script is not PUSHBYTES64 followed by 64 bytes
    """
    if len(script) != SIGNATURE_LENGTH + 1 or script[0] != SIGNATURE_PUSH:
        raise InvalidSignatureError("Invocation script is not a single signature push")
    return Signature(bytes(script[1:]))


def parse_signature(signature: bytes) -> Tuple[int, int]:
    """
    Parse raw signature into (r, s).

    Raises:
        InvalidSignatureError: If signature is not 64 bytes
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    return r, s


def encode_signature(r: int, s: int) -> Signature:
    """Encode (r, s) as a raw 64-byte signature."""
    return Signature(r.to_bytes(32, "big") + s.to_bytes(32, "big"))
