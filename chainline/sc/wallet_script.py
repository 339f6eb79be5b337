"""
Account verification script templates.

A wallet account is not guarded by a bare CHECKSIG script. Each account
runs a compiled contract that lets the hub contract move funds in
specific call contexts and otherwise requires the owner's signature.
The compiled bytes are kept opaque: each revision is a byte blob with
zero-filled regions where the owner's public key and the hub script hash
are spliced in.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ..exceptions import ValidationError

if TYPE_CHECKING:
    from ..profile import ProtocolProfile

__all__ = [
    "VerificationScriptTemplate",
    "LEGACY_WALLET_TEMPLATE",
    "CURRENT_WALLET_TEMPLATE",
    "SIGNATURE_TEMPLATE",
    "build_verification_script",
]


@dataclass(frozen=True)
class VerificationScriptTemplate:
    """Compiled verification script with named splice regions."""

    name: str
    template: bytes
    public_key_offset: int
    public_key_length: int = 33
    contract_hash_offset: Optional[int] = None
    contract_hash_length: int = 20
    revision: Optional[str] = None

    @property
    def has_contract_hash(self) -> bool:
        return self.contract_hash_offset is not None

    def render(self, public_key: bytes, contract_hash: Optional[bytes] = None) -> bytes:
        """
        Splice a public key (and hub script hash) into the template.

        Args:
            public_key: 33-byte compressed public key
            contract_hash: 20-byte hub script hash, required when the
                template has a contract hash region

        Returns:
            Verification script bytes

        Raises:
            ValidationError: If a splice value has the wrong length or a
                required contract hash is missing
        """
        if len(public_key) != self.public_key_length:
            raise ValidationError(
                f"{self.name} template needs a {self.public_key_length}-byte "
                f"public key, got {len(public_key)}"
            )

        script = bytearray(self.template)
        start = self.public_key_offset
        script[start:start + self.public_key_length] = public_key

        if self.contract_hash_offset is not None:
            if contract_hash is None or len(contract_hash) != self.contract_hash_length:
                raise ValidationError(
                    f"{self.name} template needs a {self.contract_hash_length}-byte "
                    f"contract script hash"
                )
            start = self.contract_hash_offset
            script[start:start + self.contract_hash_length] = contract_hash

        return bytes(script)


# Wallet revision a6e6bc6a503123fac7542efcbb26da3ab5b01efc
LEGACY_WALLET_TEMPLATE = VerificationScriptTemplate(
    name="legacy",
    revision="a6e6bc6a503123fac7542efcbb26da3ab5b01efc",
    template=bytes.fromhex(
        "5fc56b6a51527ac46a51c34c097369676e61747572656175754c210000000000"
        "000000000000000000000000000000000000000000000000000000006a52527a"
        "c44c20e72d286979ee6cb103e65dfddfb2e384100b8d148e7758de42e4168b71"
        "792c606a53527ac4616168164e656f2e52756e74696d652e4765745472696767"
        "657261619c5186009c630700006c75666a51c36a52c361617c65ed01009e6308"
        "00006c75666161682953797374656d2e457865637574696f6e456e67696e652e"
        "476574536372697074436f6e7461696e65726a54527ac46161682d5379737465"
        "6d2e457865637574696f6e456e67696e652e476574457865637574696e675363"
        "72697074486173686a55527ac46a54c376009e630500616161681a4e656f2e54"
        "72616e73616374696f6e2e4765744f7574707574736a56527ac4006a5d527ac4"
        "6a56c36a57527ac4006a58527ac46a58c36a57c3c0a26397006a57c36a58c3c3"
        "6a59527ac46a59c36a5a527ac46a5ac3616168184e656f2e4f75747075742e47"
        "6574536372697074486173686a55c3619c009c634c006a5ac3616168154e656f"
        "2e4f75747075742e476574417373657449646a53c3619c009c6326006a5dc36a"
        "5ac3616168134e656f2e4f75747075742e47657456616c7565936a5d527ac461"
        "6a58c351936a58527ac46264ff616a5dc300948d00a1638b006a56c300c36161"
        "68184e656f2e4f75747075742e476574536372697074486173686a57527ac44c"
        "1377616c6c65745f7265717565737454784f757454c576006a51c3c476516a52"
        "c3c476526a57c3764c09726563697069656e74617575c476536a5dc361c46161"
        "7c6700000000000000000000000000000000000000006a58527ac46a58c36c75"
        "66516c75666153c56b6a00527ac46a51527ac46a00c36a51c361ac6c756661"
    ),
    public_key_offset=27,
    contract_hash_offset=610,
)

# Hub-aware revision; same layout, different authorization branch
CURRENT_WALLET_TEMPLATE = VerificationScriptTemplate(
    name="current",
    template=bytes.fromhex(
        "5fc56b6a51527ac46a51c34c097369676e61747572656175754c210000000000"
        "000000000000000000000000000000000000000000000000000000006a52527a"
        "c44c20e72d286979ee6cb103e65dfddfb2e384100b8d148e7758de42e4168b71"
        "792c606a53527ac46a51c36a52c361617c651502009e630800006c7566616168"
        "164e656f2e52756e74696d652e4765745472696767657261619c5186009c6308"
        "00516c75666161682953797374656d2e457865637574696f6e456e67696e652e"
        "476574536372697074436f6e7461696e65726a54527ac46161682d5379737465"
        "6d2e457865637574696f6e456e67696e652e476574457865637574696e675363"
        "72697074486173686a55527ac46a54c376009e630500616161681a4e656f2e54"
        "72616e73616374696f6e2e4765744f7574707574736a56527ac4006a5d527ac4"
        "6a56c36a57527ac4006a58527ac46a58c36a57c3c0a26397006a57c36a58c3c3"
        "6a59527ac46a59c36a5a527ac46a5ac3616168184e656f2e4f75747075742e47"
        "6574536372697074486173686a55c3619c009c634c006a5ac3616168154e656f"
        "2e4f75747075742e476574417373657449646a53c3619c009c6326006a5dc36a"
        "5ac3616168134e656f2e4f75747075742e47657456616c7565936a5d527ac461"
        "6a58c351936a58527ac46264ff616a5dc300948d00a1638b006a56c300c36161"
        "68184e656f2e4f75747075742e476574536372697074486173686a57527ac44c"
        "1377616c6c65745f7265717565737454784f757454c576006a51c3c476516a52"
        "c3c476526a57c3764c09726563697069656e74617575c476536a5dc361c46161"
        "7c6700000000000000000000000000000000000000006a58527ac46a58c36c75"
        "66516c75666153c56b6a00527ac46a51527ac46a00c36a51c361ac6c756661"
    ),
    public_key_offset=27,
    contract_hash_offset=610,
)

# Stock single-signature contract: PUSHBYTES33 <pubkey> CHECKSIG
SIGNATURE_TEMPLATE = VerificationScriptTemplate(
    name="signature",
    template=bytes.fromhex("21" + "00" * 33 + "ac"),
    public_key_offset=1,
)


def build_verification_script(
    public_key: bytes,
    profile: Optional["ProtocolProfile"] = None
) -> bytes:
    """
    Build an account's verification script.

    Args:
        public_key: 33-byte compressed public key
        profile: Protocol profile selecting template and hub script hash
            (defaults to the current profile)

    Returns:
        Verification script bytes
    """
    if profile is None:
        from ..profile import DEFAULT_PROFILE
        profile = DEFAULT_PROFILE
    return profile.template.render(bytes(public_key), profile.hub_script_hash)
