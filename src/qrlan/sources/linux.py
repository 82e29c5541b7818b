"""NetworkManager (``nmcli``) backed credential source."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..errors import AccessDenied, NotFound
from ..payload import Security
from .base import CommandSource, KnownNetwork

logger = logging.getLogger(__name__)

WIRELESS_TYPES = {"802-11-wireless", "wifi"}

# ``None`` marks enterprise key management, which has no QR payload.
_KEY_MGMT: Dict[str, Optional[Security]] = {
    "": Security.OPEN,
    "owe": Security.OPEN,
    "none": Security.WEP,
    "ieee8021x": Security.WEP,
    "wpa-psk": Security.WPA_WPA2_PERSONAL,
    "sae": Security.WPA_WPA2_PERSONAL,
    "wpa-eap": None,
    "wpa-eap-suite-b-192": None,
}

NMCLI_NOT_FOUND = 10
_DENIED_MARKERS = ("not authorized", "insufficient privileges", "permission denied")


def split_terse(line: str) -> List[str]:
    """Split one line of ``nmcli -t`` output on its unescaped colons."""
    fields: List[str] = []
    current: List[str] = []
    escaped = False
    for char in line:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def parse_properties(output: str) -> Dict[str, str]:
    """Parse ``nmcli -t -f <props> connection show <id>`` into a dict."""
    properties: Dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            properties[key.strip().lower()] = value.replace("\\:", ":").replace("\\\\", "\\")
    return properties


class LinuxSource(CommandSource):
    name = "networkmanager"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._profiles: Dict[str, str] = {}

    def _query_networks(self) -> List[KnownNetwork]:
        listing = self.run_checked(["nmcli", "-t", "-f", "NAME,UUID,TYPE", "connection", "show"])
        networks: List[KnownNetwork] = []
        for line in listing.splitlines():
            parts = split_terse(line)
            if len(parts) < 3 or parts[2] not in WIRELESS_TYPES:
                continue
            name, uuid = parts[0], parts[1]
            network = self._describe(name, uuid)
            if network is not None:
                networks.append(network)
                self._profiles.setdefault(network.ssid, uuid)
        return networks

    def _describe(self, name: str, uuid: str) -> Optional[KnownNetwork]:
        result = self.run(
            [
                "nmcli", "-t", "-f",
                "802-11-wireless.ssid,802-11-wireless.hidden,802-11-wireless-security.key-mgmt",
                "connection", "show", "uuid", uuid,
            ]
        )
        if result.returncode != 0:
            logger.debug("Skipping profile %r: nmcli exit code %d", name, result.returncode)
            return None
        properties = parse_properties(result.stdout or "")
        ssid = properties.get("802-11-wireless.ssid") or name
        key_mgmt = properties.get("802-11-wireless-security.key-mgmt", "").strip().lower()
        if key_mgmt not in _KEY_MGMT:
            logger.debug("Skipping profile %r: unknown key management %r", name, key_mgmt)
            return None
        security = _KEY_MGMT[key_mgmt]
        if security is None:
            logger.info("Skipping enterprise network %r", ssid)
            return None
        hidden = properties.get("802-11-wireless.hidden", "no").strip().lower() in {"yes", "true"}
        return KnownNetwork(ssid, security, hidden)

    def fetch_secret(self, ssid: str) -> Optional[str]:
        uuid = self._profiles.get(ssid)
        selector = ["uuid", uuid] if uuid else ["id", ssid]
        result = self.run(
            [
                "nmcli", "-s", "-t", "-f",
                "802-11-wireless-security.psk,802-11-wireless-security.wep-key0",
                "connection", "show", *selector,
            ]
        )
        if result.returncode != 0:
            message = (result.stderr or "").strip()
            if result.returncode == NMCLI_NOT_FOUND:
                raise NotFound(f"no NetworkManager profile for '{ssid}'")
            if any(marker in message.lower() for marker in _DENIED_MARKERS):
                raise AccessDenied(f"NetworkManager refused to reveal the secret of '{ssid}': {message}")
            raise NotFound(f"nmcli could not read the profile '{ssid}': {message}")
        properties = parse_properties(result.stdout or "")
        for key in ("802-11-wireless-security.psk", "802-11-wireless-security.wep-key0"):
            value = properties.get(key, "")
            if value:
                return value
        return None
