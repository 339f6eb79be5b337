"""Transaction signing for the ChainLine wallet."""

import dataclasses
import logging
from typing import Optional, TYPE_CHECKING

from ..crypto.keys import PrivateKey, PublicKey
from ..crypto.signature import (
    decode_invocation_script,
    encode_invocation_script,
    sign_data,
    verify_data,
)
from ..exceptions import InvalidSignatureError
from ..sc.wallet_script import build_verification_script
from ..transactions.serializer import serialize_transaction
from ..types.common import TxId
from ..types.transaction import Transaction, Witness
from ..utils.encoding import double_sha256

if TYPE_CHECKING:
    from ..profile import ProtocolProfile

__all__ = [
    "sign_transaction",
    "verify_transaction_witness",
    "get_transaction_hash",
]

logger = logging.getLogger(__name__)


def get_transaction_hash(tx: Transaction) -> TxId:
    """
    Compute the transaction id.

    Returns:
        SHA256d of the unsigned bytes, reversed to display order
    """
    return TxId(double_sha256(serialize_transaction(tx, signed=False))[::-1].hex())


def sign_transaction(
    tx: Transaction,
    private_key: PrivateKey,
    profile: Optional["ProtocolProfile"] = None,
    deterministic: bool = True
) -> Transaction:
    """
    Sign a transaction and attach the witness.

    The unsigned serialization is signed, and the witness pairs the
    signature push with the signer's verification script. Witnesses
    already present are kept; the new one is appended after them.

    Args:
        tx: Transaction to sign
        private_key: Signing key. Whether it owns the inputs is not checked.
        profile: Protocol profile for the verification script
            (defaults to the current profile)
        deterministic: Use RFC 6979 deterministic nonces

    Returns:
        New transaction with the witness appended
    """
    unsigned = serialize_transaction(tx, signed=False)
    signature = sign_data(private_key, unsigned, deterministic=deterministic)

    witness = Witness(
        invocation_script=encode_invocation_script(signature),
        verification_script=build_verification_script(
            private_key.public_key().point, profile
        ),
    )

    signed = dataclasses.replace(tx, witnesses=list(tx.witnesses) + [witness])
    logger.info(f"Signed {tx.type.name} transaction {get_transaction_hash(tx)}")
    return signed


def verify_transaction_witness(
    tx: Transaction,
    witness: Witness,
    public_key: PublicKey,
    profile: Optional["ProtocolProfile"] = None
) -> bool:
    """
    Check a single-signature witness against a public key.

    The witness must carry the verification script the profile builds
    for the key, and its signature must verify over the unsigned bytes.

    Returns:
        True if the witness is valid
    """
    if witness.verification_script != build_verification_script(public_key.point, profile):
        return False

    try:
        signature = decode_invocation_script(witness.invocation_script)
    except InvalidSignatureError:
        return False

    return verify_data(public_key, signature, serialize_transaction(tx, signed=False))
