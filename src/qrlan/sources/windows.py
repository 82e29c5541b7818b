"""Windows source backed by the WLAN profile store (``netsh wlan``)."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..errors import AccessDenied, NotFound
from ..payload import Security
from .base import CommandSource, KnownNetwork

logger = logging.getLogger(__name__)


def parse_fields(output: str) -> Dict[str, str]:
    """Parse the ``Name   : value`` lines of netsh output; first occurrence wins."""
    fields: Dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields.setdefault(key.strip().lower(), value.strip())
    return fields


def parse_profiles(output: str) -> List[str]:
    profiles = []
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep and "profile" in key.lower() and value.strip():
            profiles.append(value.strip())
    return profiles


def security_from_authentication(authentication: str) -> Optional[Security]:
    """Map netsh's Authentication value; ``None`` for enterprise or unknown types."""
    auth = authentication.upper().replace(" ", "")
    if "ENTERPRISE" in auth:
        return None
    if auth.startswith(("WPA", "WPA2", "WPA3")) and ("PSK" in auth or "PERSONAL" in auth or "SAE" in auth):
        return Security.WPA_WPA2_PERSONAL
    if "WEP" in auth or auth == "SHARED":
        return Security.WEP
    if auth.startswith("OPEN"):
        return Security.OPEN
    return None


def security_from_profile(fields: Dict[str, str]) -> Optional[Security]:
    """Combine Authentication, Cipher and Security key of one profile.

    netsh reports WEP profiles as ``Authentication: Open`` with ``Cipher: WEP``,
    and an open profile that still stores a key is left undetected.
    """

    security = security_from_authentication(fields.get("authentication", ""))
    if security is None:
        return None
    if "WEP" in fields.get("cipher", "").upper():
        return Security.WEP
    if security is Security.OPEN and fields.get("security key", "").lower() == "present":
        return None
    return security


class WindowsSource(CommandSource):
    name = "netsh"
    encoding = "oem"

    def _profile(self, ssid: str, *extra: str):
        return self.run(["netsh", "wlan", "show", "profile", f"name={ssid}", *extra])

    def _query_networks(self) -> List[KnownNetwork]:
        names = parse_profiles(self.run_checked(["netsh", "wlan", "show", "profiles"]))
        networks = []
        for name in names:
            result = self._profile(name)
            security = None
            if result.returncode == 0:
                fields = parse_fields(result.stdout or "")
                security = security_from_profile(fields)
                if security is None and "enterprise" in fields.get("authentication", "").lower():
                    logger.info("Skipping enterprise network %r", name)
                    continue
            networks.append(KnownNetwork(name, security))
        return networks

    def fetch_secret(self, ssid: str) -> Optional[str]:
        result = self._profile(ssid, "key=clear")
        output = result.stdout or ""
        if result.returncode != 0 or "is not found" in output:
            raise NotFound(f"no WLAN profile named '{ssid}'")
        fields = parse_fields(output)
        key = fields.get("key content")
        if key:
            return key
        if fields.get("security key", "").lower() == "present":
            raise AccessDenied(f"reading the key of '{ssid}' requires an elevated prompt")
        return None
