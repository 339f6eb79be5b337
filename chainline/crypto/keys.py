"""Key management for the ChainLine wallet."""

import hashlib
import secrets
from typing import Optional, Union

from ecdsa import (
    BadDigestError,
    BadSignatureError,
    MalformedPointError,
    NIST256p,
    SigningKey,
    VerifyingKey,
)
from ecdsa.ecdsa import RSZeroError
from ecdsa.util import sigdecode_string, sigencode_string

from ..constants import WIF_COMPRESSED_FLAG, WIF_VERSION
from ..exceptions import (
    ChecksumMismatchError,
    CryptoError,
    InvalidPublicKeyError,
    InvalidWIFError,
    MalformedInputError,
    ValidationError,
)
from ..types.common import PrivateKeyBytes, PublicKeyBytes, Signature
from ..utils.encoding import decode_base58_check, encode_base58_check
from ..utils.validation import validate_private_key, validate_public_key

__all__ = ["PrivateKey", "PublicKey", "encode_wif", "decode_wif", "CURVE"]

CURVE = NIST256p

WIF_DECODED_LENGTH = 38


def encode_wif(secret: bytes) -> str:
    """
    Encode a private key in Wallet Import Format.

    The trailing 0x01 flag marks the key as used with a compressed
    public key, which is the only form the ledger accepts.

    Args:
        secret: 32-byte private key

    Returns:
        WIF encoded private key
    """
    return encode_base58_check(WIF_VERSION, bytes(secret) + bytes([WIF_COMPRESSED_FLAG]))


def decode_wif(wif: str) -> PrivateKeyBytes:
    """
    Decode a Wallet Import Format string.

    Args:
        wif: WIF string

    Returns:
        32-byte private key

    Raises:
        InvalidWIFError: If length, version byte, compression flag or
            checksum is wrong
    """
    if not isinstance(wif, str):
        raise InvalidWIFError(f"WIF must be a string, got {type(wif).__name__}")
    try:
        data = decode_base58_check(wif, expected_length=WIF_DECODED_LENGTH)
    except ChecksumMismatchError as e:
        raise InvalidWIFError("Invalid WIF checksum") from e
    except MalformedInputError as e:
        raise InvalidWIFError(f"Invalid WIF format: {e}") from e

    if data[0] != WIF_VERSION:
        raise InvalidWIFError(f"Unknown WIF version: {data[0]:#04x}")
    if data[33] != WIF_COMPRESSED_FLAG:
        raise InvalidWIFError(f"Invalid compression flag: {data[33]:#04x}")

    return PrivateKeyBytes(data[1:33])


class PrivateKey:
    """
    secp256r1 private key wrapper.

    Handles signing, public key derivation and WIF export. The secret is
    kept in a mutable buffer so that wipe() can zero it; the key is also
    wiped when used as a context manager.
    """

    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Private key as 32 bytes, hex string, or another PrivateKey

        Raises:
            ValidationError: If key format is invalid
        """
        if isinstance(key, PrivateKey):
            key = key.secret

        self._secret: Optional[bytearray] = bytearray(validate_private_key(key))
        self._key: Optional[SigningKey] = SigningKey.from_string(
            bytes(self._secret), curve=CURVE
        )

    @classmethod
    def create(cls) -> "PrivateKey":
        """
        Create new random private key.

        Returns:
            New PrivateKey instance
        """
        while True:
            key_bytes = secrets.token_bytes(32)
            try:
                return cls(key_bytes)
            except ValidationError:
                # Outside [1, n-1], try again
                continue

    @classmethod
    def from_wif(cls, wif: str) -> "PrivateKey":
        """
        Import private key from WIF.

        Raises:
            InvalidWIFError: If WIF is invalid
        """
        secret = decode_wif(wif)
        try:
            return cls(secret)
        except ValidationError as e:
            raise InvalidWIFError(f"WIF does not hold a valid key: {e}") from e

    def _require_key(self) -> SigningKey:
        if self._key is None or self._secret is None:
            raise CryptoError("Private key has been wiped")
        return self._key

    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        self._require_key()
        return PrivateKeyBytes(bytes(self._secret))

    @property
    def is_wiped(self) -> bool:
        return self._key is None

    def hex(self) -> str:
        """Get private key as hex string."""
        return self.secret.hex()

    def wif(self) -> str:
        """Export private key in Wallet Import Format."""
        return encode_wif(self.secret)

    def public_key(self) -> "PublicKey":
        """Get corresponding compressed public key."""
        verifying_key = self._require_key().get_verifying_key()
        return PublicKey(verifying_key.to_string("compressed"))

    def sign(self, message_hash: bytes, deterministic: bool = True) -> Signature:
        """
        Sign 32-byte message hash.

        Args:
            message_hash: 32-byte SHA256 digest to sign
            deterministic: Use RFC 6979 deterministic nonces

        Returns:
            64-byte raw r || s signature

        Raises:
            ValidationError: If message_hash is not 32 bytes
            CryptoError: If signing fails
        """
        if len(message_hash) != 32:
            raise ValidationError(
                f"Message hash must be 32 bytes, got {len(message_hash)}"
            )

        key = self._require_key()
        try:
            if deterministic:
                signature = key.sign_digest_deterministic(
                    message_hash,
                    hashfunc=hashlib.sha256,
                    sigencode=sigencode_string,
                )
            else:
                signature = key.sign_digest(message_hash, sigencode=sigencode_string)
        except (BadDigestError, RSZeroError) as e:
            raise CryptoError(f"Signing failed: {e}") from e
        return Signature(signature)

    def wipe(self) -> None:
        """Zero the secret buffer and drop the signing key."""
        if self._secret is not None:
            for i in range(len(self._secret)):
                self._secret[i] = 0
        self._secret = None
        self._key = None

    def __enter__(self) -> "PrivateKey":
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PrivateKey):
            return False
        if self.is_wiped or other.is_wiped:
            return False
        return secrets.compare_digest(bytes(self._secret), bytes(other._secret))

    __hash__ = None

    def __repr__(self) -> str:
        if self.is_wiped:
            return "PrivateKey(<wiped>)"
        return f"PrivateKey(<hidden>, public_key={self.public_key().hex()})"


class PublicKey:
    """
    secp256r1 public key wrapper.

    Always held in 33-byte compressed form. Uncompressed input is accepted
    and normalized.
    """

    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: Public key as bytes, hex string, or another PublicKey

        Raises:
            InvalidPublicKeyError: If the key is not a point on the curve or
                its prefix does not match the parity of y
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            self._key = key._key
            return

        key_bytes = validate_public_key(key)
        try:
            self._key = VerifyingKey.from_string(key_bytes, curve=CURVE)
        except MalformedPointError as e:
            raise InvalidPublicKeyError(f"Public key is not on secp256r1: {e}") from e

        y = self._key.pubkey.point.y()
        if key_bytes[0] in (0x02, 0x03) and (key_bytes[0] & 1) != (y & 1):
            raise InvalidPublicKeyError("Public key prefix does not match y parity")

        self._point = PublicKeyBytes(self._key.to_string("compressed"))

    @property
    def point(self) -> PublicKeyBytes:
        """Get compressed public key bytes."""
        return self._point

    def hex(self) -> str:
        """Get public key as hex string."""
        return self._point.hex()

    def uncompressed(self) -> bytes:
        """Get 65-byte uncompressed encoding."""
        return self._key.to_string("uncompressed")

    def verify(self, signature: bytes, message_hash: bytes) -> bool:
        """
        Verify signature.

        Args:
            signature: 64-byte raw r || s signature
            message_hash: 32-byte SHA256 digest

        Returns:
            True if signature is valid
        """
        if len(message_hash) != 32 or len(signature) != 64:
            return False

        try:
            return self._key.verify_digest(
                signature, message_hash, sigdecode=sigdecode_string
            )
        except BadSignatureError:
            return False

    def __bytes__(self) -> bytes:
        return bytes(self._point)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PublicKey):
            return False
        return self.point == other.point

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        return f"PublicKey({self.hex()})"
