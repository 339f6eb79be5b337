import pytest

from chainline.crypto.keys import PrivateKey, PublicKey
from chainline.crypto.signature import verify_data
from chainline.exceptions import InvalidWIFError, ValidationError, WalletError
from chainline.modules.account import (
    Account,
    AccountModule,
    address_to_script_hash,
    derive_account,
    script_hash_to_address,
)
from chainline.profile import CURRENT_PROFILE, LEGACY_PROFILE, SIGNATURE_PROFILE
from chainline.types import InvocationTransaction
from chainline.utils.encoding import hash160


def test_signature_profile_account(golden, golden_account):
    assert golden_account.address == golden["address"]
    assert golden_account.script_hash_hex == golden["script_hash"]
    assert golden_account.public_key.hex() == golden["public_key"]
    assert golden_account.wif() == golden["wif"]
    assert golden_account.verification_script.hex() == "21" + golden["public_key"] + "ac"


@pytest.mark.parametrize("profile", [CURRENT_PROFILE, LEGACY_PROFILE])
def test_wallet_profile_account(golden, profile):
    account = Account.from_wif(golden["wif"], profile)
    script = account.verification_script

    assert script[27:60] == bytes.fromhex(golden["public_key"])
    assert script[610:630] == profile.hub_script_hash
    assert account.script_hash == hash160(script)
    assert account.address != golden["address"]
    assert account.address.startswith("A")
    assert address_to_script_hash(account.address, profile) == account.script_hash


def test_profiles_give_distinct_addresses(golden):
    addresses = {
        Account.from_wif(golden["wif"], profile).address
        for profile in (CURRENT_PROFILE, LEGACY_PROFILE, SIGNATURE_PROFILE)
    }
    assert len(addresses) == 3


def test_from_secret_dispatch(golden):
    private_hex = golden["private_key"]
    public_hex = golden["public_key"]
    expected = golden["address"]

    signing_inputs = [
        golden["wif"],
        private_hex,
        "0x" + private_hex,
        bytes.fromhex(private_hex),
        PrivateKey(private_hex),
    ]
    for secret in signing_inputs:
        account = Account.from_secret(secret, SIGNATURE_PROFILE)
        assert account.address == expected
        assert account.can_sign

    uncompressed = PublicKey(public_hex).uncompressed()
    watch_inputs = [
        public_hex,
        bytes.fromhex(public_hex),
        uncompressed,
        uncompressed.hex(),
        PublicKey(public_hex),
    ]
    for secret in watch_inputs:
        account = Account.from_secret(secret, SIGNATURE_PROFILE)
        assert account.address == expected
        assert not account.can_sign


def test_from_secret_rejects_unknown_input():
    with pytest.raises(ValidationError):
        Account.from_secret(b"\x01" * 10)
    with pytest.raises(ValidationError):
        Account.from_secret(12345)
    with pytest.raises(InvalidWIFError):
        Account.from_secret("definitely not a key")


def test_from_secret_rejects_address(golden):
    with pytest.raises(ValidationError, match="address-only") as exc_info:
        Account.from_secret(golden["address"], SIGNATURE_PROFILE)
    assert not isinstance(exc_info.value, InvalidWIFError)

    current_address = Account.from_wif(golden["wif"]).address
    with pytest.raises(ValidationError, match="address-only"):
        Account.from_secret(current_address)


def test_watch_only_account(golden):
    account = Account.from_public_key(golden["public_key"], SIGNATURE_PROFILE)
    with pytest.raises(WalletError):
        account.private_key
    with pytest.raises(WalletError):
        account.wif()
    with pytest.raises(WalletError):
        account.sign_transaction(InvocationTransaction(script=b"\x61"))


def test_mismatched_keys_rejected(golden):
    with pytest.raises(ValidationError):
        Account(PublicKey(golden["public_key"]), PrivateKey.create())


def test_account_wipe(golden):
    with Account.from_wif(golden["wif"]) as account:
        assert account.can_sign
    assert not account.can_sign
    with pytest.raises(WalletError):
        account.private_key
    # Still usable as watch-only
    assert account.public_key.hex() == golden["public_key"]


def test_account_equality(golden, golden_account):
    watch = Account.from_public_key(golden["public_key"], SIGNATURE_PROFILE)
    assert watch == golden_account
    assert hash(watch) == hash(golden_account)
    assert Account.from_wif(golden["wif"]) != golden_account


def test_sign_message(golden_account):
    signature = golden_account.sign_message(b"hello")
    assert verify_data(golden_account.public_key, signature, b"hello")


def test_to_dict_has_no_secret(golden, golden_account):
    golden_account.label = "main"
    data = golden_account.to_dict()
    assert data["address"] == golden["address"]
    assert data["script_hash"] == golden["script_hash"]
    assert data["profile"] == "signature"
    assert data["label"] == "main"
    assert golden["private_key"] not in str(data)
    assert golden["wif"] not in str(data)


def test_address_helpers(golden):
    wire = bytes.fromhex(golden["script_hash"])[::-1]
    assert address_to_script_hash(golden["address"], SIGNATURE_PROFILE) == wire
    assert script_hash_to_address(golden["script_hash"], SIGNATURE_PROFILE) == golden["address"]
    assert script_hash_to_address(wire) == golden["address"]


def test_derive_account(golden):
    assert derive_account(golden["wif"], SIGNATURE_PROFILE).address == golden["address"]
    assert derive_account(golden["wif"]).profile is CURRENT_PROFILE


def test_account_module(golden):
    module = AccountModule(SIGNATURE_PROFILE)
    assert module.from_wif(golden["wif"]).address == golden["address"]
    assert module.from_secret(golden["public_key"]).address == golden["address"]
    assert module.from_private_key(golden["private_key"], label="x").label == "x"
    assert module.create_account().profile is SIGNATURE_PROFILE
    assert module.script_hash_to_address(golden["script_hash"]) == golden["address"]
