"""Transaction construction and wire format."""

from ..transactions.serializer import (
    serialize_transaction,
    deserialize_transaction,
    serialize_attribute,
    deserialize_attribute,
    serialize_input,
    deserialize_input,
    serialize_output,
    deserialize_output,
    serialize_witness,
    deserialize_witness,
    serialize_exclusive_data,
)
from ..transactions.create import (
    make_intent,
    make_intents,
    calculate_inputs,
    build_claim_tx,
    build_contract_tx,
    build_invocation_tx,
    build_transaction,
)

__all__ = [
    # Wire format
    "serialize_transaction",
    "deserialize_transaction",
    "serialize_attribute",
    "deserialize_attribute",
    "serialize_input",
    "deserialize_input",
    "serialize_output",
    "deserialize_output",
    "serialize_witness",
    "deserialize_witness",
    "serialize_exclusive_data",

    # Builders
    "make_intent",
    "make_intents",
    "calculate_inputs",
    "build_claim_tx",
    "build_contract_tx",
    "build_invocation_tx",
    "build_transaction",
]
