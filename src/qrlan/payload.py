"""Wi-Fi credential model and the ``WIFI:`` QR payload codec."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .errors import InvalidInput

_SPECIAL_CHARACTERS = ("\\", ";", ",", ":", '"')
_UNESCAPE = re.compile(r"\\(.)", re.DOTALL)

MIN_PASSPHRASE_LENGTH = 8
MAX_PASSPHRASE_LENGTH = 63


class Security(str, Enum):
    """Authentication type; the value is the code written to the ``T`` field."""

    OPEN = "nopass"
    WPA_WPA2_PERSONAL = "WPA"
    WEP = "WEP"

    @classmethod
    def parse(cls, value: str) -> "Security":
        key = value.strip().upper()
        try:
            return _SECURITY_ALIASES[key]
        except KeyError as exc:
            raise InvalidInput(f"unknown security type: {value!r} (use WPA, WEP or nopass)") from exc

    @property
    def label(self) -> str:
        return {
            Security.OPEN: "Open",
            Security.WPA_WPA2_PERSONAL: "WPA/WPA2 Personal",
            Security.WEP: "WEP",
        }[self]


_SECURITY_ALIASES = {
    "WPA": Security.WPA_WPA2_PERSONAL,
    "WPA2": Security.WPA_WPA2_PERSONAL,
    "WPA3": Security.WPA_WPA2_PERSONAL,
    "WPA/WPA2": Security.WPA_WPA2_PERSONAL,
    "SAE": Security.WPA_WPA2_PERSONAL,
    "WEP": Security.WEP,
    "NOPASS": Security.OPEN,
    "OPEN": Security.OPEN,
    "NONE": Security.OPEN,
}


@dataclass(frozen=True)
class Credential:
    ssid: str
    passphrase: Optional[str]
    security: Security
    hidden: bool = False

    def __post_init__(self) -> None:
        if not self.ssid:
            raise InvalidInput("SSID must not be empty")
        if self.security is Security.OPEN and self.passphrase is not None:
            raise InvalidInput("open networks carry no passphrase")
        if self.security is not Security.OPEN and self.passphrase is None:
            raise InvalidInput(f"{self.security.label} networks need a passphrase")


def escape(value: str) -> str:
    """Backslash-escape the payload delimiters ``\\ ; , : "``."""
    for char in _SPECIAL_CHARACTERS:
        value = value.replace(char, "\\" + char)
    return value


def unescape(value: str) -> str:
    return _UNESCAPE.sub(r"\1", value)


def encode(credential: Credential) -> str:
    """Return the Wi-Fi QR payload string for ``credential``.

    Fields are always written in the order T, S, P, H. ``P`` is left out for
    open networks and ``H`` only appears for hidden networks.
    """

    fields = [f"T:{credential.security.value}", f"S:{escape(credential.ssid)}"]
    if credential.security is not Security.OPEN:
        fields.append(f"P:{escape(credential.passphrase or '')}")
    if credential.hidden:
        fields.append("H:true")
    payload = "WIFI:" + "".join(f"{field};" for field in fields) + ";"
    if decode(payload) != credential:
        raise RuntimeError(f"payload for {credential.ssid!r} does not decode back to its credential")
    return payload


def _split_fields(body: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    current = []
    escaped = False
    for char in body:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == ";":
            field = "".join(current)
            current = []
            if not field:
                continue
            key, sep, value = field.partition(":")
            if not sep:
                raise InvalidInput(f"malformed payload field: {field!r}")
            fields[key.upper()] = value
        else:
            current.append(char)
    if current:
        raise InvalidInput("payload is not terminated by ';'")
    return fields


def decode(payload: str) -> Credential:
    """Parse a ``WIFI:`` payload back into a :class:`Credential`."""
    if not payload.startswith("WIFI:"):
        raise InvalidInput("payload does not start with 'WIFI:'")
    fields = _split_fields(payload[len("WIFI:"):])
    if "S" not in fields:
        raise InvalidInput("payload has no SSID field")
    security = Security.parse(fields.get("T", "nopass") or "nopass")
    passphrase = unescape(fields["P"]) if "P" in fields else None
    if security is Security.OPEN:
        passphrase = None
    elif passphrase is None:
        passphrase = ""
    hidden = fields.get("H", "false").lower() == "true"
    return Credential(unescape(fields["S"]), passphrase, security, hidden)


def validate_ssid(ssid: str) -> str:
    ssid = ssid.strip()
    if not ssid:
        raise InvalidInput("SSID must not be empty")
    return ssid


def validate_passphrase(passphrase: Optional[str], security: Security) -> Optional[str]:
    """Check a manually entered passphrase against the WPA length limits."""
    if security is Security.OPEN:
        return None
    length = len(passphrase or "")
    if not MIN_PASSPHRASE_LENGTH <= length <= MAX_PASSPHRASE_LENGTH:
        raise InvalidInput(
            f"passphrase must be {MIN_PASSPHRASE_LENGTH}-{MAX_PASSPHRASE_LENGTH} characters, got {length}"
        )
    return passphrase
