import pytest

from chainline.exceptions import ValidationError
from chainline.profile import (
    CURRENT_PROFILE,
    DEFAULT_PROFILE,
    LEGACY_PROFILE,
    SIGNATURE_PROFILE,
    ProtocolProfile,
    get_profile,
)
from chainline.sc.wallet_script import (
    CURRENT_WALLET_TEMPLATE,
    LEGACY_WALLET_TEMPLATE,
    SIGNATURE_TEMPLATE,
    build_verification_script,
)


@pytest.mark.parametrize("template", [LEGACY_WALLET_TEMPLATE, CURRENT_WALLET_TEMPLATE])
def test_wallet_template_layout(template):
    data = template.template
    assert len(data) == 671
    # PUSHDATA1 33 precedes the public key region
    assert data[25:27] == b"\x4c\x21"
    assert data[27:60] == bytes(33)
    # APPCALL precedes the hub script hash region
    assert data[609] == 0x67
    assert data[610:630] == bytes(20)
    assert template.has_contract_hash


def test_templates_differ_only_in_authorization_branch():
    assert LEGACY_WALLET_TEMPLATE.template != CURRENT_WALLET_TEMPLATE.template
    assert LEGACY_WALLET_TEMPLATE.template[:100] == CURRENT_WALLET_TEMPLATE.template[:100]


@pytest.mark.parametrize("profile", [LEGACY_PROFILE, CURRENT_PROFILE])
def test_render_splices_key_and_hub(golden, profile):
    public_key = bytes.fromhex(golden["public_key"])
    script = build_verification_script(public_key, profile)

    assert len(script) == 671
    assert script[27:60] == public_key
    assert script[610:630] == profile.hub_script_hash
    assert script[:27] == profile.template.template[:27]
    assert script[630:] == profile.template.template[630:]


def test_signature_template(golden):
    public_key = bytes.fromhex(golden["public_key"])
    script = build_verification_script(public_key, SIGNATURE_PROFILE)
    assert script == b"\x21" + public_key + b"\xac"
    assert not SIGNATURE_TEMPLATE.has_contract_hash


def test_default_profile_is_current(golden):
    public_key = bytes.fromhex(golden["public_key"])
    assert DEFAULT_PROFILE is CURRENT_PROFILE
    assert build_verification_script(public_key) == build_verification_script(
        public_key, CURRENT_PROFILE
    )


def test_render_rejects_bad_lengths(golden):
    public_key = bytes.fromhex(golden["public_key"])
    with pytest.raises(ValidationError):
        CURRENT_WALLET_TEMPLATE.render(public_key[:32], bytes(20))
    with pytest.raises(ValidationError):
        CURRENT_WALLET_TEMPLATE.render(public_key, bytes(19))
    with pytest.raises(ValidationError):
        CURRENT_WALLET_TEMPLATE.render(public_key)


def test_profile_requires_hub_for_wallet_template():
    with pytest.raises(ValidationError):
        ProtocolProfile(name="broken", hub_script_hash=None, template=CURRENT_WALLET_TEMPLATE)


def test_get_profile():
    assert get_profile("legacy") is LEGACY_PROFILE
    assert get_profile("signature") is SIGNATURE_PROFILE
    with pytest.raises(ValidationError):
        get_profile("unknown")
