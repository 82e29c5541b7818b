"""Credential sources, one per host platform plus manual entry."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .base import CommandSource, CredentialSource, Discovery, KnownNetwork
from .linux import LinuxSource
from .macos import MacOSSource
from .manual import ManualSource
from .windows import WindowsSource

logger = logging.getLogger(__name__)

__all__ = [
    "CommandSource",
    "CredentialSource",
    "Discovery",
    "KnownNetwork",
    "LinuxSource",
    "MacOSSource",
    "ManualSource",
    "WindowsSource",
    "detect_source",
]


def detect_source(platform: Optional[str] = None, timeout: float = 15.0) -> CredentialSource:
    """Pick the credential source for ``platform`` (defaults to ``sys.platform``)."""
    platform = platform or sys.platform
    if platform == "darwin":
        source: CredentialSource = MacOSSource(timeout=timeout)
    elif platform.startswith("win"):
        source = WindowsSource(timeout=timeout)
    elif platform.startswith("linux"):
        source = LinuxSource(timeout=timeout)
    else:
        source = ManualSource()
    logger.debug("Using %s credential source for %s", source.name, platform)
    return source
