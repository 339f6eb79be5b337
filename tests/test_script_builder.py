import pytest

from chainline.crypto.keys import PublicKey
from chainline.exceptions import ValidationError
from chainline.sc import OpCode, ScriptBuilder, build_invocation_script

HASH = bytes(range(20))


@pytest.mark.parametrize("value, expected", [
    (-1, "4f"),
    (0, "00"),
    (1, "51"),
    (16, "60"),
    (17, "0111"),
    (127, "017f"),
    (128, "028000"),
    (255, "02ff00"),
    (256, "020001"),
    (-2, "01fe"),
    (-128, "0180"),
    (-129, "027fff"),
    (65535, "03ffff00"),
])
def test_push_int(value, expected):
    assert ScriptBuilder().emit_push_int(value).hex() == expected


def test_push_bytes_headers():
    assert ScriptBuilder().emit_push_bytes(b"").hex() == "00"

    data = b"\x01" * 75
    assert ScriptBuilder().emit_push_bytes(data).to_bytes() == b"\x4b" + data

    data = b"\x01" * 76
    assert ScriptBuilder().emit_push_bytes(data).to_bytes() == b"\x4c\x4c" + data

    data = b"\x01" * 256
    assert ScriptBuilder().emit_push_bytes(data).to_bytes() == b"\x4d\x00\x01" + data


def test_push_bool_and_none():
    assert ScriptBuilder().emit_push(True).hex() == "51"
    assert ScriptBuilder().emit_push(False).hex() == "00"
    assert ScriptBuilder().emit_push(None).hex() == "00"


def test_push_string_and_public_key(golden):
    assert ScriptBuilder().emit_push("hi").hex() == "026869"
    key = PublicKey(golden["public_key"])
    assert ScriptBuilder().emit_push(key).hex() == "21" + golden["public_key"]


def test_push_unsupported_type():
    with pytest.raises(ValidationError):
        ScriptBuilder().emit_push(1.5)


def test_push_nested_array():
    assert ScriptBuilder().emit_push([[1, 2]]).hex() == "525152c151c1"


def test_app_call_without_args():
    script = ScriptBuilder().emit_app_call(HASH, "name", [])
    assert script.hex() == "00c1046e616d6567" + HASH.hex()


def test_app_call_args_are_packed_in_order():
    script = ScriptBuilder().emit_app_call(HASH, "op", [1, b"\xaa", "hi"])
    assert script.hex() == "026869" "01aa" "51" "53" "c1" "026f70" "67" + HASH.hex()


def test_app_call_display_hash_is_reversed():
    display = HASH[::-1].hex()
    script = ScriptBuilder().emit_app_call(display).to_bytes()
    assert script == bytes([OpCode.APPCALL]) + HASH


def test_tail_call():
    script = ScriptBuilder().emit_app_call(HASH, use_tail_call=True).to_bytes()
    assert script[0] == OpCode.TAILCALL
    assert len(script) == 21


def test_app_call_invalid_hash():
    with pytest.raises(ValidationError):
        ScriptBuilder().emit_app_call(b"\x00" * 19, "op")


def test_sys_call():
    script = ScriptBuilder().emit_sys_call("Neo.Runtime.CheckWitness")
    assert script.hex() == "6818" + b"Neo.Runtime.CheckWitness".hex()
    with pytest.raises(ValidationError):
        ScriptBuilder().emit_sys_call("")


def test_builder_chains():
    builder = ScriptBuilder().emit_push(1).emit(OpCode.NOP).emit(OpCode.RET)
    assert builder.hex() == "516166"
    assert len(builder) == 3


def test_build_invocation_script():
    script = build_invocation_script(HASH, "balanceOf", [HASH])
    expected = ScriptBuilder().emit_app_call(HASH, "balanceOf", [HASH]).to_bytes()
    assert script == expected
    assert script.endswith(b"\x67" + HASH)
