"""Virtual machine opcodes emitted by the script builder."""

from enum import IntEnum

__all__ = ["OpCode"]


class OpCode(IntEnum):
    """NeoVM 2.x opcodes."""
    PUSH0 = 0x00
    PUSHF = 0x00
    PUSHBYTES1 = 0x01
    PUSHBYTES20 = 0x14
    PUSHBYTES33 = 0x21
    PUSHBYTES64 = 0x40
    PUSHBYTES75 = 0x4b
    PUSHDATA1 = 0x4c
    PUSHDATA2 = 0x4d
    PUSHDATA4 = 0x4e
    PUSHM1 = 0x4f
    PUSH1 = 0x51
    PUSHT = 0x51
    PUSH2 = 0x52
    PUSH16 = 0x60

    # Flow control
    NOP = 0x61
    JMP = 0x62
    JMPIF = 0x63
    JMPIFNOT = 0x64
    CALL = 0x65
    RET = 0x66
    APPCALL = 0x67
    SYSCALL = 0x68
    TAILCALL = 0x69

    # Crypto
    CHECKSIG = 0xac
    VERIFY = 0xad
    CHECKMULTISIG = 0xae

    # Arrays
    ARRAYSIZE = 0xc0
    PACK = 0xc1
    UNPACK = 0xc2
    NEWARRAY = 0xc5
