"""Wallet module for the ChainLine wallet."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ..crypto.keys import PrivateKey
from ..exceptions import WalletError
from ..modules.account import Account, Secret
from ..profile import DEFAULT_PROFILE, ProtocolProfile
from ..types.address import Balance
from ..types.common import Address, ScriptHash
from ..types.transaction import (
    ClaimTransaction,
    Transaction,
    TransactionAttributeUsage,
)

__all__ = ["Wallet"]

logger = logging.getLogger(__name__)


class Wallet:
    """
    Keyring of accounts sharing one protocol profile.

    Signs transactions with every account that has to witness them.
    The ledger checks witnesses against the signer script hashes sorted
    as 160-bit little-endian integers, so witnesses are appended in that
    order.
    """

    def __init__(self, name: str, profile: ProtocolProfile = DEFAULT_PROFILE) -> None:
        """
        Initialize wallet.

        Args:
            name: Wallet identifier
            profile: Profile for every account in the wallet
        """
        self.name = name
        self.profile = profile
        self._accounts: Dict[Address, Account] = {}
        self._default_account: Optional[Address] = None
        self._logger = logging.getLogger(f"{__name__}.Wallet.{name}")

    def _store(self, account: Account) -> Account:
        if account.profile != self.profile:
            raise WalletError(
                f"Account profile {account.profile.name!r} does not match "
                f"wallet profile {self.profile.name!r}"
            )
        self._accounts[account.address] = account
        if self._default_account is None:
            self._default_account = account.address
        return account

    def create_account(self, label: Optional[str] = None) -> Account:
        """
        Create new account with random key.

        Args:
            label: Account label

        Returns:
            New Account instance
        """
        account = Account.create(
            self.profile, label=label or f"Account {len(self._accounts)}"
        )
        self._store(account)
        self._logger.info(f"Created account: {account.address}")
        return account

    def add_account(
        self,
        account: Union[Account, Secret],
        label: Optional[str] = None
    ) -> Account:
        """
        Add an account, or derive one from key material and add it.

        Args:
            account: Account, PrivateKey, PublicKey, WIF, or raw/hex key
            label: Account label for derived accounts

        Returns:
            Stored Account instance
        """
        if not isinstance(account, Account):
            account = Account.from_secret(account, self.profile, label)
        self._store(account)
        self._logger.info(f"Added account: {account.address}")
        return account

    def import_wif(self, wif: str, label: Optional[str] = None) -> Account:
        """
        Import account from WIF.

        Raises:
            InvalidWIFError: If the WIF is malformed
        """
        return self.add_account(PrivateKey.from_wif(wif), label)

    def get_account(self, address: Optional[str] = None) -> Account:
        """
        Get account by address or default.

        Raises:
            WalletError: If the wallet is empty or has no such account
        """
        if address is None:
            if self._default_account is None:
                raise WalletError("No accounts in wallet")
            address = self._default_account

        if address not in self._accounts:
            raise WalletError(f"Account not found: {address}")

        return self._accounts[address]

    def remove_account(self, address: str) -> None:
        """Remove an account and wipe its key."""
        account = self.get_account(address)
        del self._accounts[account.address]
        account.wipe()
        if self._default_account == account.address:
            self._default_account = next(iter(self._accounts), None)
        self._logger.info(f"Removed account: {account.address}")

    def set_default_account(self, address: str) -> None:
        self._default_account = self.get_account(address).address

    def list_accounts(self) -> List[Account]:
        """Get all accounts in wallet."""
        return list(self._accounts.values())

    @property
    def accounts(self) -> List[Account]:
        """Get all accounts."""
        return self.list_accounts()

    @property
    def addresses(self) -> List[Address]:
        """Get all addresses."""
        return list(self._accounts.keys())

    def find_by_script_hash(self, script_hash: bytes) -> Optional[Account]:
        for account in self._accounts.values():
            if account.script_hash == script_hash:
                return account
        return None

    def required_signers(
        self,
        tx: Transaction,
        balances: Iterable[Balance] = ()
    ) -> List[ScriptHash]:
        """
        Work out which script hashes must witness a transaction.

        Inputs are matched to owners through the given balances. SCRIPT
        attributes add their script hash directly. For a claim, the
        claiming outputs' owners sign.

        Args:
            tx: Transaction to inspect
            balances: Balances of the addresses that may own the inputs

        Returns:
            Script hashes in witness order
        """
        owners: Dict[tuple, Address] = {}
        for balance in balances:
            for asset_balance in balance.assets.values():
                for coin in asset_balance.unspent:
                    owners[(coin.txid, coin.index)] = balance.address

        hashes = set()
        for tx_input in tx.inputs:
            address = owners.get((tx_input.prev_hash, tx_input.prev_index))
            if address is None:
                raise WalletError(f"Unknown owner for input {tx_input}")
            if address not in self._accounts:
                raise WalletError(f"Input {tx_input} belongs to {address}, not in wallet")
            hashes.add(self._accounts[address].script_hash)

        for attribute in tx.attributes:
            if attribute.usage == TransactionAttributeUsage.SCRIPT:
                hashes.add(ScriptHash(attribute.data))

        if isinstance(tx, ClaimTransaction):
            for output in tx.outputs:
                if self.find_by_script_hash(output.script_hash) is not None:
                    hashes.add(output.script_hash)

        return sorted(hashes, key=lambda script_hash: script_hash[::-1])

    def sign_transaction(
        self,
        tx: Transaction,
        balances: Iterable[Balance] = ()
    ) -> Transaction:
        """
        Sign a transaction with every account that must witness it.

        Args:
            tx: Unsigned transaction
            balances: Balances used to find input owners

        Returns:
            New transaction with all witnesses attached

        Raises:
            WalletError: If a required signer is not in the wallet or
                cannot sign
        """
        signers = self.required_signers(tx, balances)
        if not signers:
            raise WalletError("Transaction has no signers in this wallet")

        for script_hash in signers:
            account = self.find_by_script_hash(script_hash)
            if account is None:
                raise WalletError(
                    f"No account for script hash {script_hash[::-1].hex()}"
                )
            tx = account.sign_transaction(tx)

        self._logger.debug(f"Signed with {len(signers)} accounts")
        return tx

    def wipe(self) -> None:
        """Wipe every private key in the wallet."""
        for account in self._accounts.values():
            account.wipe()

    def __enter__(self) -> "Wallet":
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __len__(self) -> int:
        return len(self._accounts)

    def to_dict(self) -> Dict[str, Any]:
        """Export wallet data (without private keys)."""
        return {
            "name": self.name,
            "profile": self.profile.name,
            "accounts": [account.to_dict() for account in self._accounts.values()],
            "default_account": self._default_account,
        }
