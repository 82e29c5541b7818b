"""Destination handling: turn an output argument into one file path per format."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .formats import OutputFormat

_UNSAFE = re.compile(r"[^\w]+", re.UNICODE)


class PathKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"
    DEFAULT = "default"


@dataclass(frozen=True)
class PathSpec:
    kind: PathKind
    path: Optional[Path] = None

    @classmethod
    def directory(cls, path: Path) -> "PathSpec":
        return cls(PathKind.DIRECTORY, Path(path))

    @classmethod
    def file(cls, path: Path) -> "PathSpec":
        return cls(PathKind.FILE, Path(path))

    @classmethod
    def default(cls) -> "PathSpec":
        return cls(PathKind.DEFAULT)

    @classmethod
    def from_argument(cls, value: Optional[str]) -> "PathSpec":
        """Classify a ``--output-path`` value.

        Existing directories and values ending in a path separator name a
        directory; anything else names the output file.
        """

        if not value:
            return cls.default()
        separators = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)
        path = Path(value).expanduser()
        if value.endswith(separators) or path.is_dir():
            return cls.directory(path)
        return cls.file(path)


def sanitize_name(text: str) -> str:
    """Lower-case ``text`` and collapse every path-unsafe run into ``_``."""
    name = _UNSAFE.sub("_", text.strip().lower()).strip("_")
    return name or "wifi"


def base_name(ssid: str) -> str:
    return f"{sanitize_name(ssid)}_qrcode"


def resolve(spec: PathSpec, fmt: OutputFormat, ssid: str, default_dir: Path) -> Optional[Path]:
    """Return the file ``fmt`` is written to, or ``None`` for console output."""
    extension = fmt.extension
    if extension is None:
        return None
    if spec.kind is PathKind.FILE:
        return spec.path.with_suffix(f".{extension}")
    directory = spec.path if spec.kind is PathKind.DIRECTORY else default_dir
    return directory / f"{base_name(ssid)}.{extension}"
