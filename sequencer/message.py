"""The create-sequencer message and address decoding."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from .description import Description
from .errors import ErrInvalidAddress, ErrInvalidType
from .types import ROUTER_KEY

TYPE_MSG_CREATE_SEQUENCER = "create_sequencer"
ACCOUNT_ADDRESS_PREFIX = "dym"
SECP256K1_PUBKEY_TYPE_URL = "/cosmos.crypto.secp256k1.PubKey"

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_INDEX = {c: i for i, c in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_BECH32_LENGTH = 1023
_MAX_ADDRESS_BYTES = 255


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, gen in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= gen
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(values: bytes | list[int], from_bits: int, to_bits: int, pad: bool) -> bytes:
    acc = 0
    bits = 0
    out = []
    max_value = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in values:
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding in bech32 data")
    return bytes(out)


def _bech32_encode(hrp: str, data: bytes) -> str:
    values = list(_convert_bits(data, 8, 5, True))
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * 6) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(_CHARSET[v] for v in values + checksum)


def _bech32_decode(text: str) -> tuple[str, bytes]:
    if len(text) > _MAX_BECH32_LENGTH:
        raise ValueError("bech32 string too long")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise ValueError("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise ValueError("bech32 string has mixed case")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + 7 > len(text):
        raise ValueError("invalid separator index")
    hrp = text[:separator]
    try:
        values = [_CHARSET_INDEX[c] for c in text[separator + 1:]]
    except KeyError as exc:
        raise ValueError(f"invalid character not part of charset: {exc.args[0]}") from None
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise ValueError("invalid checksum")
    return hrp, _convert_bits(values[:-6], 5, 8, False)


def decode_bech32_address(address: str) -> bytes:
    """Decode an account address, raising ValueError if it is not valid."""
    if not address.strip():
        raise ValueError("empty address string is not allowed")
    hrp, data = _bech32_decode(address)
    if hrp != ACCOUNT_ADDRESS_PREFIX:
        raise ValueError(f"invalid Bech32 prefix; expected {ACCOUNT_ADDRESS_PREFIX}, got {hrp}")
    if not data:
        raise ValueError("addresses cannot be empty")
    if len(data) > _MAX_ADDRESS_BYTES:
        raise ValueError(f"address max length is {_MAX_ADDRESS_BYTES}, got {len(data)}")
    return data


@dataclass(frozen=True)
class PubKey:
    """A public key together with the type it is declared as."""

    key: bytes
    type_url: str = SECP256K1_PUBKEY_TYPE_URL

    def to_dict(self) -> dict[str, str]:
        return {"@type": self.type_url, "key": base64.b64encode(self.key).decode("ascii")}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PubKey":
        return cls(key=base64.b64decode(data.get("key", "")), type_url=data.get("@type", ""))


_JSON_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


@dataclass
class MsgCreateSequencer:
    """Request to register ``creator`` as a sequencer of a rollapp."""

    creator: str = ""
    dymint_pub_key: Any = None
    rollapp_id: str = ""
    description: Description = field(default_factory=Description)

    def route(self) -> str:
        return ROUTER_KEY

    def type(self) -> str:
        return TYPE_MSG_CREATE_SEQUENCER

    def get_signers(self) -> list[bytes]:
        """The creator's address bytes; raises ValueError if it is invalid."""
        return [decode_bech32_address(self.creator)]

    def to_dict(self) -> dict[str, Any]:
        pub_key = self.dymint_pub_key
        return {
            "creator": self.creator,
            "dymintPubKey": pub_key.to_dict() if isinstance(pub_key, PubKey) else None,
            "rollappId": self.rollapp_id,
            "description": self.description.to_dict(),
        }

    def get_sign_bytes(self) -> bytes:
        """Canonical JSON of the message: sorted keys, no whitespace."""
        text = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        for char, escaped in _JSON_ESCAPES:
            text = text.replace(char, escaped)
        return text.encode("utf-8")

    def validate_basic(self) -> None:
        """Stateless checks; raises on the first problem found."""
        try:
            decode_bech32_address(self.creator)
        except ValueError as exc:
            raise ErrInvalidAddress(f"invalid creator address ({exc})") from exc
        if self.dymint_pub_key is not None and not isinstance(self.dymint_pub_key, PubKey):
            raise ErrInvalidType(f"Expecting PubKey, got {type(self.dymint_pub_key).__name__}")
        self.description.ensure_length()


def new_msg_create_sequencer(
    creator: str,
    pubkey: PubKey | None,
    rollapp_id: str,
    description: Description,
) -> MsgCreateSequencer:
    """Build a create-sequencer message."""
    return MsgCreateSequencer(
        creator=creator,
        dymint_pub_key=pubkey,
        rollapp_id=rollapp_id,
        description=description,
    )