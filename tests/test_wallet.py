import pytest

from chainline.constants import GAS_ASSET_ID
from chainline.crypto.transaction_signing import verify_transaction_witness
from chainline.exceptions import WalletError
from chainline.modules.account import Account
from chainline.modules.wallet import Wallet
from chainline.profile import CURRENT_PROFILE, SIGNATURE_PROFILE
from chainline.transactions import build_contract_tx, make_intents
from chainline.types import (
    ClaimTransaction,
    InvocationTransaction,
    TransactionAttribute,
    TransactionAttributeUsage,
    TransactionInput,
    TransactionOutput,
)

RECIPIENT = bytes(range(20))


def _script_attribute(account):
    return TransactionAttribute(TransactionAttributeUsage.SCRIPT, bytes(account.script_hash))


@pytest.fixture
def wallet(golden):
    wallet = Wallet("test", SIGNATURE_PROFILE)
    wallet.import_wif(golden["wif"], label="main")
    return wallet


def test_account_management(golden, wallet):
    assert len(wallet) == 1
    assert wallet.addresses == [golden["address"]]
    assert wallet.get_account().label == "main"
    assert wallet.get_account(golden["address"]).address == golden["address"]

    second = wallet.create_account()
    assert second.label == "Account 1"
    assert len(wallet.accounts) == 2

    wallet.set_default_account(second.address)
    assert wallet.get_account() is second

    wallet.remove_account(second.address)
    assert not second.can_sign
    assert wallet.get_account().address == golden["address"]

    with pytest.raises(WalletError):
        wallet.get_account("AKnowhere")
    with pytest.raises(WalletError):
        Wallet("empty").get_account()


def test_add_account_from_secret(golden):
    wallet = Wallet("watch", SIGNATURE_PROFILE)
    account = wallet.add_account(golden["public_key"], label="cold")
    assert account.label == "cold"
    assert not account.can_sign
    assert wallet.find_by_script_hash(account.script_hash) is account
    assert wallet.find_by_script_hash(RECIPIENT) is None


def test_profile_mismatch(golden, wallet):
    with pytest.raises(WalletError):
        wallet.add_account(Account.from_wif(golden["wif"], CURRENT_PROFILE))


def test_sign_contract_transaction(golden_account, wallet, balance):
    tx = build_contract_tx(golden_account, balance, make_intents({"NEO": 5}, RECIPIENT))
    signed = wallet.sign_transaction(tx, [balance])

    assert len(signed.witnesses) == 1
    account = wallet.get_account()
    assert verify_transaction_witness(
        signed, signed.witnesses[0], account.public_key, SIGNATURE_PROFILE
    )


def test_unknown_input_owner(golden_account, wallet, balance):
    tx = build_contract_tx(golden_account, balance, make_intents({"NEO": 5}, RECIPIENT))
    with pytest.raises(WalletError):
        wallet.required_signers(tx)


def test_input_owner_outside_wallet(golden_account, balance):
    tx = build_contract_tx(golden_account, balance, make_intents({"NEO": 5}, RECIPIENT))
    other = Wallet("other", SIGNATURE_PROFILE)
    other.create_account()
    with pytest.raises(WalletError):
        other.sign_transaction(tx, [balance])


def test_script_attribute_signers(wallet):
    account = wallet.get_account()
    tx = InvocationTransaction(script=b"\x61", attributes=[_script_attribute(account)])
    assert wallet.required_signers(tx) == [account.script_hash]

    stranger = TransactionAttribute(TransactionAttributeUsage.SCRIPT, RECIPIENT)
    tx = InvocationTransaction(script=b"\x61", attributes=[stranger])
    with pytest.raises(WalletError):
        wallet.sign_transaction(tx)


def test_no_signers(wallet):
    with pytest.raises(WalletError):
        wallet.sign_transaction(InvocationTransaction(script=b"\x61"))


def test_witnesses_follow_script_hash_order(wallet):
    wallet.create_account()
    wallet.create_account()
    accounts = wallet.accounts
    tx = InvocationTransaction(
        script=b"\x61",
        attributes=[_script_attribute(account) for account in accounts],
    )

    signers = wallet.required_signers(tx)
    values = [int.from_bytes(script_hash, "little") for script_hash in signers]
    assert values == sorted(values)
    assert len(signers) == 3

    signed = wallet.sign_transaction(tx)
    scripts = [witness.verification_script for witness in signed.witnesses]
    assert scripts == [wallet.find_by_script_hash(h).verification_script for h in signers]


def test_claim_signer(wallet):
    account = wallet.get_account()
    tx = ClaimTransaction(
        claims=[TransactionInput(prev_hash="01" * 32, prev_index=0)],
        outputs=[TransactionOutput(
            asset_id=GAS_ASSET_ID, value=100, script_hash=account.script_hash
        )],
    )
    assert wallet.required_signers(tx) == [account.script_hash]
    assert wallet.sign_transaction(tx).is_signed


def test_wallet_wipe_and_export(golden, wallet):
    data = wallet.to_dict()
    assert data["name"] == "test"
    assert data["profile"] == "signature"
    assert data["default_account"] == golden["address"]
    assert golden["wif"] not in str(data)

    with wallet:
        assert wallet.get_account().can_sign
    assert not wallet.get_account().can_sign
