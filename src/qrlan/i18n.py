"""Localized user-facing strings.

The table maps the canonical English phrase to its translations. Lookups for a
missing phrase or locale return the English phrase unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    GERMAN = "de"


_STRINGS: Mapping[str, Mapping[str, str]] = {
    "Available Wi-Fi networks": {"de": "Verfügbare WLAN-Netzwerke"},
    "Select a network by number": {"de": "Netzwerk per Nummer auswählen"},
    "Would you like to enter the network manually?": {
        "de": "Möchten Sie das Netzwerk manuell eingeben?"
    },
    "Enter the SSID": {"de": "SSID eingeben"},
    "Enter the password (leave empty for an open network)": {
        "de": "Passwort eingeben (leer lassen für ein offenes Netzwerk)"
    },
    "Security type (WPA, WEP or nopass)": {"de": "Sicherheitstyp (WPA, WEP oder nopass)"},
    "Is the network hidden?": {"de": "Ist das Netzwerk versteckt?"},
    "Title for the PDF": {"de": "Titel für das PDF"},
    "Invalid input": {"de": "Ungültige Eingabe"},
    "Format": {"de": "Format"},
    "Status": {"de": "Status"},
    "Details": {"de": "Details"},
    "OK": {"de": "OK"},
    "FAILED": {"de": "FEHLER"},
    "printed to console": {"de": "in der Konsole ausgegeben"},
}


def translate(key: str, language: Language = Language.ENGLISH) -> str:
    """Return ``key`` in ``language``, falling back to the English key."""
    if language is Language.ENGLISH:
        return key
    return _STRINGS.get(key, {}).get(language.value, key)
