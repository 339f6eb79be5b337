"""Smart contract scripts: opcodes, builder and wallet templates."""

from .opcode import OpCode
from .script_builder import ScriptBuilder, build_invocation_script
from .wallet_script import (
    VerificationScriptTemplate,
    LEGACY_WALLET_TEMPLATE,
    CURRENT_WALLET_TEMPLATE,
    SIGNATURE_TEMPLATE,
    build_verification_script,
)

__all__ = [
    "OpCode",
    "ScriptBuilder",
    "build_invocation_script",
    "VerificationScriptTemplate",
    "LEGACY_WALLET_TEMPLATE",
    "CURRENT_WALLET_TEMPLATE",
    "SIGNATURE_TEMPLATE",
    "build_verification_script",
]
