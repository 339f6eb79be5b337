"""ChainLine wallet modules."""

from ..modules.account import (
    Account,
    AccountModule,
    derive_account,
    address_to_script_hash,
    script_hash_to_address,
)
from ..modules.fee import fixed8_gas_ceil, gas_cost_ceil, legacy_gas_cost_ceil
from ..modules.wallet import Wallet

__all__ = [
    # Account
    "Account",
    "AccountModule",
    "derive_account",
    "address_to_script_hash",
    "script_hash_to_address",

    # Fees
    "fixed8_gas_ceil",
    "gas_cost_ceil",
    "legacy_gas_cost_ceil",

    # Wallet
    "Wallet",
]
