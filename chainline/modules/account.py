"""Account module for the ChainLine wallet."""

import logging
from typing import Any, Dict, Optional, Union

from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import ValidationError, WalletError
from ..profile import DEFAULT_PROFILE, ProtocolProfile
from ..sc.wallet_script import build_verification_script
from ..types.common import Address, ScriptHash, Signature
from ..types.transaction import Transaction
from ..utils.encoding import decode_address, encode_address, hash160
from ..utils.validation import HEX_PATTERN, is_valid_address, validate_script_hash

__all__ = [
    "Account",
    "AccountModule",
    "derive_account",
    "address_to_script_hash",
    "script_hash_to_address",
]

logger = logging.getLogger(__name__)

Secret = Union[str, bytes, PrivateKey, PublicKey]


def address_to_script_hash(
    address: str,
    profile: ProtocolProfile = DEFAULT_PROFILE
) -> ScriptHash:
    """
    Decode an address to its 20-byte script hash.

    Raises:
        AddressError: If the address is malformed or has another version
        ChecksumMismatchError: If the checksum is wrong
    """
    return decode_address(address, profile.address_version)


def script_hash_to_address(
    script_hash: Union[str, bytes],
    profile: ProtocolProfile = DEFAULT_PROFILE
) -> Address:
    """
    Encode a script hash as an address.

    Args:
        script_hash: 20 wire-order bytes, or display-order hex
        profile: Profile selecting the address version

    Returns:
        Address string
    """
    return encode_address(validate_script_hash(script_hash), profile.address_version)


class Account:
    """
    Ledger account derived from a key pair.

    The verification script, script hash and address are fixed at
    construction from the public key and the profile. An account built
    from a public key alone can receive but not sign.
    """

    def __init__(
        self,
        public_key: PublicKey,
        private_key: Optional[PrivateKey] = None,
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None,
    ) -> None:
        """
        Initialize account.

        Args:
            public_key: Account public key
            private_key: Matching private key, if the account can sign
            profile: Protocol profile for the verification script
            label: Account label

        Raises:
            ValidationError: If the private key does not match the public key
        """
        if private_key is not None and private_key.public_key() != public_key:
            raise ValidationError("Private key does not match public key")

        self._public_key = public_key
        self._private_key = private_key
        self._profile = profile
        self.label = label

        self._verification_script = build_verification_script(public_key.point, profile)
        self._script_hash = ScriptHash(hash160(self._verification_script))
        self._address = encode_address(self._script_hash, profile.address_version)

        self._logger = logging.getLogger(f"{__name__}.Account.{self._address[:8]}")

    @classmethod
    def create(
        cls,
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None
    ) -> "Account":
        """Create account with a new random key."""
        account = cls.from_private_key(PrivateKey.create(), profile, label)
        logger.info(f"Created account: {account.address}")
        return account

    @classmethod
    def from_private_key(
        cls,
        private_key: Union[str, bytes, PrivateKey],
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None
    ) -> "Account":
        """
        Create account from a private key.

        Args:
            private_key: 32 bytes, hex string or PrivateKey

        Raises:
            ValidationError: If the key is not a valid secp256r1 scalar
        """
        if not isinstance(private_key, PrivateKey):
            private_key = PrivateKey(private_key)
        return cls(private_key.public_key(), private_key, profile, label)

    @classmethod
    def from_wif(
        cls,
        wif: str,
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None
    ) -> "Account":
        """
        Import account from WIF.

        Raises:
            InvalidWIFError: If the WIF is malformed
        """
        return cls.from_private_key(PrivateKey.from_wif(wif), profile, label)

    @classmethod
    def from_public_key(
        cls,
        public_key: Union[str, bytes, PublicKey],
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None
    ) -> "Account":
        """
        Create a watch-only account.

        Raises:
            InvalidPublicKeyError: If the key is not a valid curve point
        """
        if not isinstance(public_key, PublicKey):
            public_key = PublicKey(public_key)
        return cls(public_key, None, profile, label)

    @classmethod
    def from_secret(
        cls,
        secret: Secret,
        profile: ProtocolProfile = DEFAULT_PROFILE,
        label: Optional[str] = None
    ) -> "Account":
        """
        Create account from whatever key material is given.

        Accepts a PrivateKey or PublicKey, 32 raw bytes or 64 hex chars
        (private key), 33/65 raw bytes or 66/130 hex chars (public key),
        or a WIF string.

        Raises:
            ValidationError: If the input matches none of these shapes
                or is an address, which carries no key
        """
        if isinstance(secret, PrivateKey):
            return cls.from_private_key(secret, profile, label)
        if isinstance(secret, PublicKey):
            return cls.from_public_key(secret, profile, label)

        if isinstance(secret, (bytes, bytearray)):
            if len(secret) == 32:
                return cls.from_private_key(bytes(secret), profile, label)
            if len(secret) in (33, 65):
                return cls.from_public_key(bytes(secret), profile, label)
            raise ValidationError(f"Unrecognized key length: {len(secret)} bytes")

        if isinstance(secret, str):
            text = secret[2:] if secret.startswith("0x") else secret
            if HEX_PATTERN.match(text):
                if len(text) == 64:
                    return cls.from_private_key(text, profile, label)
                if len(text) in (66, 130):
                    return cls.from_public_key(text, profile, label)
            if is_valid_address(secret, profile.address_version):
                raise ValidationError(
                    f"{secret} is an address; address-only accounts cannot "
                    "derive a verification script"
                )
            return cls.from_wif(secret, profile, label)

        raise ValidationError(f"Unsupported secret type: {type(secret).__name__}")

    @property
    def public_key(self) -> PublicKey:
        """Get public key."""
        return self._public_key

    @property
    def private_key(self) -> PrivateKey:
        """
        Get private key.

        Raises:
            WalletError: If the account is watch-only or was wiped
        """
        if self._private_key is None:
            raise WalletError(f"Account {self._address} has no private key")
        if self._private_key.is_wiped:
            raise WalletError(f"Private key of {self._address} has been wiped")
        return self._private_key

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None and not self._private_key.is_wiped

    @property
    def profile(self) -> ProtocolProfile:
        return self._profile

    @property
    def verification_script(self) -> bytes:
        """Get the account's verification script."""
        return self._verification_script

    @property
    def script_hash(self) -> ScriptHash:
        """Get script hash in wire order."""
        return self._script_hash

    @property
    def script_hash_hex(self) -> str:
        """Get script hash in display order, as shown by explorers."""
        return self._script_hash[::-1].hex()

    @property
    def address(self) -> Address:
        """Get account address."""
        return self._address

    def wif(self) -> str:
        """Export private key as WIF."""
        return self.private_key.wif()

    def sign_message(self, data: bytes) -> Signature:
        """
        Sign arbitrary bytes.

        Returns:
            64-byte raw r || s signature over SHA256(data)
        """
        from ..crypto.signature import sign_data
        return sign_data(self.private_key, data)

    def sign_transaction(self, tx: Transaction, deterministic: bool = True) -> Transaction:
        """
        Sign a transaction with this account.

        Returns:
            New transaction with this account's witness appended

        Raises:
            WalletError: If the account cannot sign
        """
        from ..crypto.transaction_signing import sign_transaction
        return sign_transaction(tx, self.private_key, self._profile, deterministic)

    def wipe(self) -> None:
        """Zero the private key. The account stays usable as watch-only."""
        if self._private_key is not None:
            self._private_key.wipe()
            self._logger.debug("Private key wiped")

    def __enter__(self) -> "Account":
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return False
        return self._verification_script == other._verification_script

    def __hash__(self) -> int:
        return hash(self._verification_script)

    def to_dict(self) -> Dict[str, Any]:
        """Export account data (without private key)."""
        return {
            "address": str(self._address),
            "public_key": self._public_key.hex(),
            "script_hash": self.script_hash_hex,
            "verification_script": self._verification_script.hex(),
            "profile": self._profile.name,
            "label": self.label,
        }

    def __repr__(self) -> str:
        """String representation."""
        return f"<Account address={self._address} label={self.label}>"


def derive_account(
    secret: Secret,
    profile: ProtocolProfile = DEFAULT_PROFILE
) -> Account:
    """
    Derive an account from key material.

    See Account.from_secret for accepted inputs.
    """
    return Account.from_secret(secret, profile)


class AccountModule:
    """
    Account factory bound to one protocol profile.
    """

    def __init__(self, profile: ProtocolProfile = DEFAULT_PROFILE) -> None:
        """
        Initialize account module.

        Args:
            profile: Profile every created account uses
        """
        self._profile = profile
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def profile(self) -> ProtocolProfile:
        return self._profile

    def create_account(self, label: Optional[str] = None) -> Account:
        """Create new account with random key."""
        return Account.create(self._profile, label)

    def from_private_key(
        self,
        private_key: Union[str, bytes, PrivateKey],
        label: Optional[str] = None
    ) -> Account:
        return Account.from_private_key(private_key, self._profile, label)

    def from_wif(self, wif: str, label: Optional[str] = None) -> Account:
        return Account.from_wif(wif, self._profile, label)

    def from_public_key(
        self,
        public_key: Union[str, bytes, PublicKey],
        label: Optional[str] = None
    ) -> Account:
        return Account.from_public_key(public_key, self._profile, label)

    def from_secret(self, secret: Secret, label: Optional[str] = None) -> Account:
        account = Account.from_secret(secret, self._profile, label)
        self._logger.debug(f"Derived account {account.address}")
        return account

    def address_to_script_hash(self, address: str) -> ScriptHash:
        return address_to_script_hash(address, self._profile)

    def script_hash_to_address(self, script_hash: Union[str, bytes]) -> Address:
        return script_hash_to_address(script_hash, self._profile)
