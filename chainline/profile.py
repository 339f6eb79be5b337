"""Protocol profiles binding a wallet template to its hub contract."""

from dataclasses import dataclass
from typing import Dict, Optional

from .constants import ADDRESS_VERSION, TX_VERSION
from .exceptions import ValidationError
from .sc.wallet_script import (
    CURRENT_WALLET_TEMPLATE,
    LEGACY_WALLET_TEMPLATE,
    SIGNATURE_TEMPLATE,
    VerificationScriptTemplate,
)
from .types.common import ScriptHash

__all__ = [
    "ProtocolProfile",
    "LEGACY_PROFILE",
    "CURRENT_PROFILE",
    "SIGNATURE_PROFILE",
    "DEFAULT_PROFILE",
    "PROFILES",
    "get_profile",
]


@dataclass(frozen=True)
class ProtocolProfile:
    """
    Protocol constants an account and its transactions depend on.

    Attributes:
        name: Profile name
        hub_script_hash: Hub contract script hash, 20 bytes in the order
            it appears in scripts (spliced into the wallet template and
            used as the APPCALL target)
        template: Verification script template for accounts
        address_version: Address version byte
        invocation_version: Default version for invocation transactions
    """

    name: str
    hub_script_hash: Optional[ScriptHash]
    template: VerificationScriptTemplate
    address_version: int = ADDRESS_VERSION
    invocation_version: int = TX_VERSION["INVOCATION"]

    def __post_init__(self) -> None:
        if self.template.has_contract_hash and (
            self.hub_script_hash is None or len(self.hub_script_hash) != 20
        ):
            raise ValidationError(
                f"Profile {self.name!r} needs a 20-byte hub script hash"
            )


LEGACY_PROFILE = ProtocolProfile(
    name="legacy",
    hub_script_hash=ScriptHash(bytes.fromhex("30a2b04139d714564eb956896498616cf8acc8db")),
    template=LEGACY_WALLET_TEMPLATE,
)

CURRENT_PROFILE = ProtocolProfile(
    name="current",
    hub_script_hash=ScriptHash(bytes.fromhex("fe8ec60d009691abe25ba4050010092e947b735e")),
    template=CURRENT_WALLET_TEMPLATE,
)

# Plain CHECKSIG accounts, as created by stock ledger wallets
SIGNATURE_PROFILE = ProtocolProfile(
    name="signature",
    hub_script_hash=None,
    template=SIGNATURE_TEMPLATE,
)

DEFAULT_PROFILE = CURRENT_PROFILE

PROFILES: Dict[str, ProtocolProfile] = {
    profile.name: profile
    for profile in (LEGACY_PROFILE, CURRENT_PROFILE, SIGNATURE_PROFILE)
}


def get_profile(name: str) -> ProtocolProfile:
    """
    Look up a predefined profile by name.

    Raises:
        ValidationError: If no profile has that name
    """
    try:
        return PROFILES[name]
    except KeyError as e:
        raise ValidationError(
            f"Unknown profile: {name}. Known profiles: {', '.join(sorted(PROFILES))}"
        ) from e
