import pytest

from chainline.modules.account import Account
from chainline.profile import SIGNATURE_PROFILE
from chainline.types.address import Balance

# Stock single-signature account, as used by neon-js test vectors
GOLDEN = {
    "wif": "L2QTooFoDFyRFTxmtiVHt5CfsXfVnexdbENGDkkrrgTTryiLsPMG",
    "private_key": "9ab7e154840daca3a2efadaf0df93cd3a5b51768c632f5433f86909d9b994a69",
    "public_key": "031d8e1630ce640966967bc6d95223d21f44304133003140c3b52004dc981349c9",
    "script_hash": "5df31f6f59e6a4fbdd75103786bf73db1000b235",
    "address": "ALfnhLg7rUyL6Jr98bzzoxz5J7m64fbR4s",
}


@pytest.fixture
def golden():
    return dict(GOLDEN)


@pytest.fixture
def golden_account():
    return Account.from_wif(GOLDEN["wif"], SIGNATURE_PROFILE)


@pytest.fixture
def current_account():
    return Account.from_wif(GOLDEN["wif"])


def make_balance(address):
    return Balance.from_dict({
        "address": address,
        "NEO": {
            "balance": 10,
            "unspent": [
                {"index": 1, "txid": "bb" * 32, "value": 7},
                {"index": 0, "txid": "aa" * 32, "value": 3},
            ],
        },
        "GAS": {
            "balance": "5.5",
            "unspent": [
                {"index": 2, "txid": "dd" * 32, "value": 4},
                {"index": 0, "txid": "cc" * 32, "value": "1.5"},
            ],
        },
    })


@pytest.fixture
def balance(golden_account):
    return make_balance(golden_account.address)
