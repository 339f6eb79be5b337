"""Main ChainLine wallet client."""

import logging
from typing import Any, List, Optional, Sequence, Union

from .constants import Network
from .crypto.keys import PrivateKey
from .crypto.transaction_signing import (
    get_transaction_hash,
    sign_transaction,
    verify_transaction_witness,
)
from .exceptions import ValidationError
from .modules.account import Account, AccountModule, Secret
from .modules.fee import gas_cost_ceil
from .modules.wallet import Wallet
from .profile import DEFAULT_PROFILE, ProtocolProfile, get_profile
from .sc.script_builder import build_invocation_script
from .transactions.create import BalanceLike, ClaimDataLike, build_transaction
from .transactions.serializer import deserialize_transaction, serialize_transaction
from .types.common import Amount, HexStr, TxId
from .types.transaction import (
    Transaction,
    TransactionAttribute,
    TransactionType,
    Witness,
)
from .types.address import TransferIntent

__all__ = ["ChainLine"]

logger = logging.getLogger(__name__)


class ChainLine:
    """
    Wallet core bound to one protocol profile.

    Derives accounts, builds hub contract invocations and assembles,
    signs and (de)serializes transactions. Sending the resulting bytes
    is left to the caller's transport.
    """

    def __init__(
        self,
        profile: Union[ProtocolProfile, str] = DEFAULT_PROFILE,
        network: Network = Network.MAINNET,
    ) -> None:
        """
        Initialize ChainLine client.

        Args:
            profile: Protocol profile or its name ("legacy", "current",
                "signature")
            network: Network the transactions are meant for
        """
        if isinstance(profile, str):
            profile = get_profile(profile)
        self._profile = profile
        self._network = Network(network)
        self._account = AccountModule(profile)

        logger.info(
            f"Initialized ChainLine client for {self._network.value} "
            f"with {profile.name} profile"
        )

    @property
    def profile(self) -> ProtocolProfile:
        return self._profile

    @property
    def network(self) -> Network:
        """Get current network."""
        return self._network

    @property
    def account(self) -> AccountModule:
        """Get account module."""
        return self._account

    def derive_account(self, secret: Secret) -> Account:
        """Derive an account under this client's profile."""
        return self._account.from_secret(secret)

    def create_wallet(self, name: str) -> Wallet:
        """Create an empty wallet under this client's profile."""
        return Wallet(name, self._profile)

    def build_invocation_script(
        self,
        operation: str,
        args: Optional[Sequence[Any]] = None
    ) -> bytes:
        """
        Build bytecode calling an operation on the hub contract.

        Raises:
            ValidationError: If the profile has no hub contract
        """
        if self._profile.hub_script_hash is None:
            raise ValidationError(
                f"Profile {self._profile.name!r} has no hub contract"
            )
        return build_invocation_script(self._profile.hub_script_hash, operation, args)

    def build_transaction(
        self,
        kind: Union[TransactionType, int, str],
        account: Account,
        balances: Optional[BalanceLike] = None,
        intents: Optional[Sequence[TransferIntent]] = None,
        script: Optional[Union[bytes, str]] = None,
        gas_cost: Amount = 0,
        claim_data: Optional[ClaimDataLike] = None,
        attributes: Optional[List[TransactionAttribute]] = None,
    ) -> Transaction:
        """Build an unsigned transaction; see transactions.build_transaction."""
        return build_transaction(
            kind,
            account,
            balances=balances,
            intents=intents,
            script=script,
            gas_cost=gas_cost,
            claim_data=claim_data,
            attributes=attributes,
        )

    def sign(
        self,
        tx: Transaction,
        signer: Union[Account, PrivateKey],
        deterministic: bool = True
    ) -> Transaction:
        """
        Sign a transaction.

        Args:
            tx: Transaction to sign
            signer: Account or private key
            deterministic: Use RFC 6979 deterministic nonces

        Returns:
            New transaction with the witness appended
        """
        private_key = signer.private_key if isinstance(signer, Account) else signer
        return sign_transaction(tx, private_key, self._profile, deterministic)

    def verify(self, tx: Transaction, witness: Witness, account: Account) -> bool:
        """Check one witness against an account's public key."""
        return verify_transaction_witness(tx, witness, account.public_key, self._profile)

    def serialize(self, tx: Transaction, signed: bool = True) -> bytes:
        return serialize_transaction(tx, signed=signed)

    def deserialize(self, data: Union[bytes, HexStr, str]) -> Transaction:
        return deserialize_transaction(data)

    def get_transaction_hash(self, tx: Transaction) -> TxId:
        return get_transaction_hash(tx)

    def gas_cost_ceil(self, gas: Amount) -> int:
        return gas_cost_ceil(gas)

    def __repr__(self) -> str:
        return f"<ChainLine profile={self._profile.name} network={self._network.value}>"
