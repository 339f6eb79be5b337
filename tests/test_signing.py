import dataclasses

from chainline.crypto.keys import PrivateKey
from chainline.crypto.signature import decode_invocation_script, verify_data
from chainline.crypto.transaction_signing import (
    get_transaction_hash,
    sign_transaction,
    verify_transaction_witness,
)
from chainline.profile import CURRENT_PROFILE, SIGNATURE_PROFILE
from chainline.transactions import (
    build_contract_tx,
    deserialize_transaction,
    make_intents,
    serialize_transaction,
)
from chainline.types import InvocationTransaction
from chainline.utils.encoding import double_sha256

RECIPIENT = bytes(range(20))

# Version 1 invocation of script 0x61 carrying 1 GAS
UNSIGNED_INVOCATION = "d101016100e1f50500000000000000"
PINNED_SIGNATURE = (
    "abb3de61742d9819b5b531ed0f0684ac65ed8ddb10016c279e90efadc44270ab"
    "5695e712333c17e87f6db42180abfb7565d9a4aeb27d800260d64a7ccb443d87"
)


def test_transaction_hash_ignores_witnesses(golden_account):
    tx = InvocationTransaction(script=b"\x61")
    expected = double_sha256(serialize_transaction(tx, signed=False))[::-1].hex()
    assert get_transaction_hash(tx) == expected

    signed = golden_account.sign_transaction(tx)
    assert get_transaction_hash(signed) == expected


def test_sign_transaction_attaches_witness(golden, golden_account, balance):
    tx = build_contract_tx(golden_account, balance, make_intents({"NEO": 1}, RECIPIENT))
    key = PrivateKey(golden["private_key"])
    signed = sign_transaction(tx, key, SIGNATURE_PROFILE)

    assert tx.witnesses == []
    assert len(signed.witnesses) == 1
    witness = signed.witnesses[0]
    assert witness.invocation_script[0] == 0x40
    assert len(witness.invocation_script) == 65
    assert witness.verification_script == golden_account.verification_script
    assert verify_transaction_witness(signed, witness, key.public_key(), SIGNATURE_PROFILE)


def test_deterministic_signing_is_repeatable(golden_account):
    tx = InvocationTransaction(script=b"\x61")
    assert golden_account.sign_transaction(tx) == golden_account.sign_transaction(tx)


def test_signing_appends_after_existing_witnesses(golden_account, current_account):
    tx = InvocationTransaction(script=b"\x61")
    once = golden_account.sign_transaction(tx)
    twice = current_account.sign_transaction(once)
    assert twice.witnesses[0] == once.witnesses[0]
    assert twice.witnesses[1].verification_script == current_account.verification_script


def test_verify_rejects_tampering(golden_account):
    tx = InvocationTransaction(script=b"\x61")
    signed = golden_account.sign_transaction(tx)
    witness = signed.witnesses[0]
    public_key = golden_account.public_key

    tampered = dataclasses.replace(signed, script=b"\x62")
    assert not verify_transaction_witness(tampered, witness, public_key, SIGNATURE_PROFILE)

    # Same key, different profile: verification script no longer matches
    assert not verify_transaction_witness(signed, witness, public_key, CURRENT_PROFILE)

    broken = dataclasses.replace(witness, invocation_script=witness.invocation_script[1:])
    assert not verify_transaction_witness(signed, broken, public_key, SIGNATURE_PROFILE)


def test_current_profile_witness(current_account):
    tx = InvocationTransaction(script=b"\x61")
    signed = current_account.sign_transaction(tx, deterministic=False)
    witness = signed.witnesses[0]
    assert len(witness.verification_script) == 671
    assert verify_transaction_witness(signed, witness, current_account.public_key, CURRENT_PROFILE)
    assert verify_transaction_witness(signed, witness, current_account.public_key)


def test_signature_profile_signed_bytes_are_pinned(golden):
    tx = deserialize_transaction(UNSIGNED_INVOCATION)
    signed = sign_transaction(tx, PrivateKey(golden["private_key"]), SIGNATURE_PROFILE)

    assert serialize_transaction(signed).hex() == (
        UNSIGNED_INVOCATION
        + "01" + "41" + "40" + PINNED_SIGNATURE
        + "23" + "21" + golden["public_key"] + "ac"
    )


def test_current_profile_signed_bytes_are_pinned(golden, current_account):
    tx = deserialize_transaction(UNSIGNED_INVOCATION)
    signed = sign_transaction(tx, PrivateKey(golden["private_key"]), CURRENT_PROFILE)

    assert serialize_transaction(signed).hex() == (
        UNSIGNED_INVOCATION
        + "01" + "41" + "40" + PINNED_SIGNATURE
        + "fd9f02" + current_account.verification_script.hex()
    )


def test_every_single_bit_flip_fails_verification(golden_account):
    tx = deserialize_transaction(UNSIGNED_INVOCATION)
    signed = golden_account.sign_transaction(tx)
    signature = decode_invocation_script(signed.witnesses[0].invocation_script)
    raw = serialize_transaction(tx, signed=False)
    public_key = golden_account.public_key

    assert verify_data(public_key, signature, raw)
    for index in range(len(raw)):
        for bit in range(8):
            flipped = bytearray(raw)
            flipped[index] ^= 1 << bit
            assert not verify_data(public_key, signature, bytes(flipped))
