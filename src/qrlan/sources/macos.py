"""macOS source: preferred networks from ``networksetup``, secrets from the keychain."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..errors import AccessDenied, NotFound, SourceUnavailable
from .base import CommandSource, KnownNetwork

logger = logging.getLogger(__name__)

KEYCHAIN_KIND = "AirPort network password"

ITEM_NOT_FOUND = 44
# Locked keychain, no authorization, user cancelled the prompt.
_DENIED_CODES = {36, 51, 128}


def find_wifi_device(listing: str) -> Optional[str]:
    """Return the device (``en0``...) of the Wi-Fi hardware port, if any."""
    lines = iter(listing.splitlines())
    for line in lines:
        if "Hardware Port: Wi-Fi" in line or "Hardware Port: AirPort" in line:
            device_line = next(lines, "")
            if device_line.startswith("Device:"):
                return device_line.split(":", 1)[1].strip()
    return None


class MacOSSource(CommandSource):
    name = "keychain"

    def _query_networks(self) -> List[KnownNetwork]:
        device = find_wifi_device(self.run_checked(["networksetup", "-listallhardwareports"]))
        if device is None:
            raise SourceUnavailable("no Wi-Fi hardware port found")

        output = self.run_checked(["networksetup", "-listpreferredwirelessnetworks", device])
        # First line is the "Preferred networks on en0:" header.
        ssids = [line.strip() for line in output.splitlines()[1:]]
        return [KnownNetwork(ssid) for ssid in ssids if ssid]

    def fetch_secret(self, ssid: str) -> Optional[str]:
        result = self.run(["security", "find-generic-password", "-D", KEYCHAIN_KIND, "-a", ssid, "-w"])
        if result.returncode == ITEM_NOT_FOUND:
            raise NotFound(f"no keychain item for '{ssid}'")
        if result.returncode in _DENIED_CODES:
            raise AccessDenied(f"keychain access to '{ssid}' was denied")
        if result.returncode != 0:
            raise AccessDenied(
                f"'security' exited with code {result.returncode}: {(result.stderr or '').strip()}"
            )
        secret = (result.stdout or "").rstrip("\r\n")
        return secret or None
