"""VM bytecode builder for smart contract invocations."""

import logging
import struct
from typing import Any, Iterable, Optional, Sequence, Union

from ..exceptions import ValidationError
from ..types.common import ScriptHash
from ..utils.validation import validate_script_hash
from .opcode import OpCode

__all__ = ["ScriptBuilder", "build_invocation_script"]

logger = logging.getLogger(__name__)

MAX_SYSCALL_NAME = 252


class ScriptBuilder:
    """
    Append-only NeoVM script writer.

    Every emit method returns the builder so calls can be chained:

        script = ScriptBuilder().emit_app_call(hub, "transfer", [a, b, 5]).to_bytes()
    """

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def to_bytes(self) -> bytes:
        """Get the script built so far."""
        return bytes(self._data)

    def hex(self) -> str:
        return self._data.hex()

    def emit(self, opcode: Union[OpCode, int], operand: bytes = b"") -> "ScriptBuilder":
        """Append an opcode and its raw operand."""
        self._data.append(int(opcode))
        self._data.extend(operand)
        return self

    def emit_push_bytes(self, data: bytes) -> "ScriptBuilder":
        """
        Push a byte string using the shortest header.

        Args:
            data: Bytes to push; empty bytes push PUSH0

        Returns:
            This builder
        """
        length = len(data)
        if length == 0:
            return self.emit(OpCode.PUSH0)
        if length <= OpCode.PUSHBYTES75:
            return self.emit(length, data)
        if length <= 0xff:
            return self.emit(OpCode.PUSHDATA1, bytes([length]) + data)
        if length <= 0xffff:
            return self.emit(OpCode.PUSHDATA2, struct.pack("<H", length) + data)
        if length <= 0xffffffff:
            return self.emit(OpCode.PUSHDATA4, struct.pack("<I", length) + data)
        raise ValidationError(f"Push data too large: {length} bytes")

    def emit_push_int(self, value: int) -> "ScriptBuilder":
        """
        Push an integer.

        -1, 0 and 1..16 use single opcodes; anything else is pushed as
        minimal little-endian two's complement bytes.
        """
        if value == -1:
            return self.emit(OpCode.PUSHM1)
        if value == 0:
            return self.emit(OpCode.PUSH0)
        if 1 <= value <= 16:
            return self.emit(OpCode.PUSH1 - 1 + value)

        magnitude = value if value >= 0 else ~value
        length = magnitude.bit_length() // 8 + 1
        return self.emit_push_bytes(value.to_bytes(length, "little", signed=True))

    def emit_push_bool(self, value: bool) -> "ScriptBuilder":
        return self.emit(OpCode.PUSHT if value else OpCode.PUSHF)

    def emit_push_array(self, items: Sequence[Any]) -> "ScriptBuilder":
        """Push items in reverse order followed by their count and PACK."""
        for item in reversed(items):
            self.emit_push(item)
        self.emit_push_int(len(items))
        return self.emit(OpCode.PACK)

    def emit_push(self, value: Any) -> "ScriptBuilder":
        """
        Push a single argument, dispatching on its type.

        Supported: bytes, str (UTF-8), bool, int, None, list/tuple (nested
        arrays), and any object exposing __bytes__ such as PublicKey.

        Raises:
            ValidationError: If the argument type is not supported
        """
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return self.emit_push_bool(value)
        if value is None:
            return self.emit(OpCode.PUSHF)
        if isinstance(value, int):
            return self.emit_push_int(value)
        if isinstance(value, (bytes, bytearray)):
            return self.emit_push_bytes(bytes(value))
        if isinstance(value, str):
            return self.emit_push_bytes(value.encode("utf-8"))
        if isinstance(value, (list, tuple)):
            return self.emit_push_array(value)
        if hasattr(value, "__bytes__"):
            return self.emit_push_bytes(bytes(value))
        raise ValidationError(f"Unsupported script argument type: {type(value).__name__}")

    def emit_app_call(
        self,
        script_hash: Union[ScriptHash, bytes, str],
        operation: Optional[Union[str, bytes]] = None,
        args: Optional[Iterable[Any]] = None,
        use_tail_call: bool = False
    ) -> "ScriptBuilder":
        """
        Emit a call into another contract.

        Args:
            script_hash: Contract script hash, 20 wire-order bytes or
                display-order hex
            operation: Operation name; omitted for a bare call
            args: Operation arguments, packed into one array
            use_tail_call: Emit TAILCALL instead of APPCALL

        Returns:
            This builder

        Raises:
            ValidationError: If the script hash or an argument is invalid
        """
        target = validate_script_hash(script_hash)

        if operation is not None:
            self.emit_push_array(list(args) if args is not None else [])
            self.emit_push(operation)
        elif args is not None:
            self.emit_push_array(list(args))

        opcode = OpCode.TAILCALL if use_tail_call else OpCode.APPCALL
        return self.emit(opcode, target)

    def emit_sys_call(self, api: str) -> "ScriptBuilder":
        """
        Emit an interop service call such as "Neo.Runtime.CheckWitness".

        Raises:
            ValidationError: If the API name is empty or too long
        """
        name = api.encode("ascii")
        if not name or len(name) > MAX_SYSCALL_NAME:
            raise ValidationError(f"Invalid interop service name: {api!r}")
        return self.emit(OpCode.SYSCALL, bytes([len(name)]) + name)


def build_invocation_script(
    script_hash: Union[ScriptHash, bytes, str],
    operation: Union[str, bytes],
    args: Optional[Iterable[Any]] = None
) -> bytes:
    """
    Build the bytecode for one contract operation call.

    Args:
        script_hash: Contract script hash
        operation: Operation name
        args: Operation arguments

    Returns:
        Invocation script bytes
    """
    script = ScriptBuilder().emit_app_call(script_hash, operation, args).to_bytes()
    logger.debug(f"Built invocation script for {operation!r}: {len(script)} bytes")
    return script
