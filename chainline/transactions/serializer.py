"""Wire (de)serialization of ledger transactions."""

import logging
import struct
from typing import Callable, Dict, List, Type, Union

from ..constants import MAX_TRANSACTION_ATTRIBUTE_SIZE
from ..exceptions import (
    MalformedInputError,
    SerializationError,
    UnsupportedTransactionKindError,
    ValidationError,
)
from ..types.common import AssetId, Fixed8, HexStr, ScriptHash, TxId
from ..types.transaction import (
    ClaimTransaction,
    ContractTransaction,
    InvocationTransaction,
    Transaction,
    TransactionAttribute,
    TransactionAttributeUsage as Usage,
    TransactionInput,
    TransactionOutput,
    TransactionType,
    Witness,
)
from ..utils.encoding import (
    ByteReader,
    encode_fixed8,
    encode_var_bytes,
    encode_varint,
    hex_to_bytes,
)

__all__ = [
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
]

logger = logging.getLogger(__name__)

# Attribute usages whose data has a fixed wire length
_FIXED_32 = {Usage.CONTRACT_HASH, Usage.VOTE} | {
    usage for usage in Usage if Usage.HASH1 <= usage <= Usage.HASH15
}
_ECDH = {Usage.ECDH02, Usage.ECDH03}
_VAR_LENGTH = {Usage.DESCRIPTION} | {
    usage for usage in Usage if usage >= Usage.REMARK
}


def _reversed_hash(value: str, what: str) -> bytes:
    """Display-order 32-byte hex to wire bytes."""
    try:
        data = hex_to_bytes(value)
    except ValidationError as e:
        raise SerializationError(f"Invalid {what}: {value!r}") from e
    if len(data) != 32:
        raise SerializationError(f"{what} must be 32 bytes, got {len(data)}")
    return data[::-1]


def serialize_attribute(attribute: TransactionAttribute) -> bytes:
    """
    Serialize a transaction attribute.

    Raises:
        SerializationError: If the data does not fit its usage
    """
    try:
        usage = Usage(attribute.usage)
    except ValueError as e:
        raise SerializationError(f"Unknown attribute usage: {attribute.usage!r}") from e
    data = bytes(attribute.data)

    if len(data) > MAX_TRANSACTION_ATTRIBUTE_SIZE:
        raise SerializationError(
            f"Attribute data too large: {len(data)} > {MAX_TRANSACTION_ATTRIBUTE_SIZE}"
        )

    out = bytearray([usage])
    if usage in _FIXED_32:
        if len(data) != 32:
            raise SerializationError(f"{usage.name} attribute must be 32 bytes")
        out.extend(data)
    elif usage in _ECDH:
        if len(data) != 33 or data[0] != usage:
            raise SerializationError(
                f"{usage.name} attribute must be a 33-byte point with prefix {usage:#04x}"
            )
        out.extend(data[1:])
    elif usage == Usage.SCRIPT:
        if len(data) != 20:
            raise SerializationError("SCRIPT attribute must be 20 bytes")
        out.extend(data)
    elif usage == Usage.DESCRIPTION_URL:
        if len(data) > 0xff:
            raise SerializationError("DESCRIPTION_URL attribute must be under 256 bytes")
        out.append(len(data))
        out.extend(data)
    elif usage in _VAR_LENGTH:
        out.extend(encode_var_bytes(data))
    else:
        raise SerializationError(f"Unsupported attribute usage: {usage:#04x}")
    return bytes(out)


def deserialize_attribute(reader: ByteReader) -> TransactionAttribute:
    """
    Read one transaction attribute.

    Raises:
        MalformedInputError: If the usage byte is unknown or data is short
    """
    raw_usage = reader.read_uint8()
    try:
        usage = Usage(raw_usage)
    except ValueError as e:
        raise MalformedInputError(f"Unknown attribute usage: {raw_usage:#04x}") from e

    if usage in _FIXED_32:
        data = reader.read(32)
    elif usage in _ECDH:
        data = bytes([usage]) + reader.read(32)
    elif usage == Usage.SCRIPT:
        data = reader.read(20)
    elif usage == Usage.DESCRIPTION_URL:
        data = reader.read(reader.read_uint8())
    else:
        data = reader.read_var_bytes(MAX_TRANSACTION_ATTRIBUTE_SIZE)
    return TransactionAttribute(usage=usage, data=data)


def serialize_input(tx_input: TransactionInput) -> bytes:
    """Serialize an input: reversed prev hash and u16 index."""
    try:
        index = struct.pack("<H", tx_input.prev_index)
    except struct.error as e:
        raise SerializationError(f"Input index out of range: {tx_input.prev_index}") from e
    return _reversed_hash(tx_input.prev_hash, "input prev hash") + index


def deserialize_input(reader: ByteReader) -> TransactionInput:
    prev_hash = reader.read(32)[::-1].hex()
    return TransactionInput(prev_hash=TxId(prev_hash), prev_index=reader.read_uint16())


def serialize_output(output: TransactionOutput) -> bytes:
    """Serialize an output: reversed asset id, Fixed8 value, script hash."""
    script_hash = bytes(output.script_hash)
    if len(script_hash) != 20:
        raise SerializationError(
            f"Output script hash must be 20 bytes, got {len(script_hash)}"
        )
    return (
        _reversed_hash(output.asset_id, "output asset id")
        + encode_fixed8(output.value)
        + script_hash
    )


def deserialize_output(reader: ByteReader) -> TransactionOutput:
    asset_id = reader.read(32)[::-1].hex()
    value = reader.read_fixed8()
    script_hash = reader.read(20)
    return TransactionOutput(
        asset_id=AssetId(asset_id),
        value=Fixed8(value),
        script_hash=ScriptHash(script_hash),
    )


def serialize_witness(witness: Witness) -> bytes:
    return (
        encode_var_bytes(witness.invocation_script)
        + encode_var_bytes(witness.verification_script)
    )


def deserialize_witness(reader: ByteReader) -> Witness:
    invocation_script = reader.read_var_bytes()
    verification_script = reader.read_var_bytes()
    return Witness(
        invocation_script=invocation_script,
        verification_script=verification_script,
    )


def _serialize_list(items: List, serialize: Callable) -> bytes:
    out = bytearray(encode_varint(len(items)))
    for item in items:
        out.extend(serialize(item))
    return bytes(out)


def _read_list(reader: ByteReader, deserialize: Callable) -> List:
    count = reader.read_varint(reader.remaining)
    return [deserialize(reader) for _ in range(count)]


def _serialize_claim(tx: ClaimTransaction) -> bytes:
    return _serialize_list(tx.claims, serialize_input)


def _serialize_contract(tx: ContractTransaction) -> bytes:
    return b""


def _serialize_invocation(tx: InvocationTransaction) -> bytes:
    out = encode_var_bytes(tx.script)
    if tx.version >= 1:
        out += encode_fixed8(tx.gas)
    return out


def _deserialize_claim(reader: ByteReader, version: int) -> Dict:
    return {"claims": _read_list(reader, deserialize_input)}


def _deserialize_contract(reader: ByteReader, version: int) -> Dict:
    return {}


def _deserialize_invocation(reader: ByteReader, version: int) -> Dict:
    fields = {"script": reader.read_var_bytes()}
    if version >= 1:
        fields["gas"] = reader.read_fixed8()
    return fields


_TRANSACTION_CLASSES: Dict[TransactionType, Type[Transaction]] = {
    TransactionType.CLAIM: ClaimTransaction,
    TransactionType.CONTRACT: ContractTransaction,
    TransactionType.INVOCATION: InvocationTransaction,
}

_EXCLUSIVE_SERIALIZERS = {
    TransactionType.CLAIM: _serialize_claim,
    TransactionType.CONTRACT: _serialize_contract,
    TransactionType.INVOCATION: _serialize_invocation,
}

_EXCLUSIVE_DESERIALIZERS = {
    TransactionType.CLAIM: _deserialize_claim,
    TransactionType.CONTRACT: _deserialize_contract,
    TransactionType.INVOCATION: _deserialize_invocation,
}


def serialize_exclusive_data(tx: Transaction) -> bytes:
    """
    Serialize the kind-specific payload.

    Raises:
        UnsupportedTransactionKindError: If the transaction kind is unknown
    """
    kind = getattr(tx, "type", None)
    serializer = _EXCLUSIVE_SERIALIZERS.get(kind)
    if serializer is None:
        raise UnsupportedTransactionKindError(kind if kind is not None else -1)
    return serializer(tx)


def serialize_transaction(tx: Transaction, signed: bool = True) -> bytes:
    """
    Serialize a transaction to wire bytes.

    Args:
        tx: Transaction to serialize
        signed: Append witnesses. The unsigned form is what gets hashed
            and signed.

    Returns:
        Serialized transaction

    Raises:
        UnsupportedTransactionKindError: If the transaction kind is unknown
        SerializationError: If a field does not fit the wire format
    """
    if not 0 <= tx.version <= 0xff:
        raise SerializationError(f"Transaction version out of range: {tx.version}")

    out = bytearray()
    out.append(tx.type)
    out.append(tx.version)
    out.extend(serialize_exclusive_data(tx))
    out.extend(_serialize_list(tx.attributes, serialize_attribute))
    out.extend(_serialize_list(tx.inputs, serialize_input))
    out.extend(_serialize_list(tx.outputs, serialize_output))
    if signed and tx.witnesses:
        out.extend(_serialize_list(tx.witnesses, serialize_witness))

    logger.debug(
        f"Serialized {tx.type.name} transaction: {len(out)} bytes "
        f"({'signed' if signed and tx.witnesses else 'unsigned'})"
    )
    return bytes(out)


def deserialize_transaction(data: Union[bytes, HexStr, str]) -> Transaction:
    """
    Parse wire bytes into a typed transaction.

    An unsigned transaction ends right after its outputs; a signed one is
    followed by its witnesses.

    Args:
        data: Serialized transaction as bytes or hex string

    Returns:
        ClaimTransaction, ContractTransaction or InvocationTransaction

    Raises:
        UnsupportedTransactionKindError: If the type byte is unknown
        MalformedInputError: If the data is truncated, malformed or has
            trailing bytes
    """
    if isinstance(data, str):
        try:
            data = hex_to_bytes(data)
        except ValidationError as e:
            raise MalformedInputError(f"Invalid transaction hex: {e}") from e

    reader = ByteReader(data)
    raw_type = reader.read_uint8()
    try:
        kind = TransactionType(raw_type)
    except ValueError as e:
        raise UnsupportedTransactionKindError(raw_type) from e

    version = reader.read_uint8()
    fields = _EXCLUSIVE_DESERIALIZERS[kind](reader, version)
    fields["attributes"] = _read_list(reader, deserialize_attribute)
    fields["inputs"] = _read_list(reader, deserialize_input)
    fields["outputs"] = _read_list(reader, deserialize_output)
    if not reader.is_empty():
        fields["witnesses"] = _read_list(reader, deserialize_witness)
    if not reader.is_empty():
        raise MalformedInputError(
            f"Trailing data after transaction: {reader.remaining} bytes"
        )

    return _TRANSACTION_CLASSES[kind](version=version, **fields)
