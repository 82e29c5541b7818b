"""Output formats and the per-invocation render request."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Optional

if TYPE_CHECKING:
    from .paths import PathSpec


class OutputFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    SVG = "svg"
    CONSOLE = "console"
    PDF = "pdf"

    @property
    def extension(self) -> Optional[str]:
        return None if self is OutputFormat.CONSOLE else self.value

    @classmethod
    def ordered(cls, formats) -> list:
        """``formats`` sorted in declaration order."""
        order = list(cls)
        return sorted(set(formats), key=order.index)


DEFAULT_FORMATS: FrozenSet[OutputFormat] = frozenset({OutputFormat.PDF})


@dataclass(frozen=True)
class RenderRequest:
    payload: str
    formats: FrozenSet[OutputFormat]
    destination: "PathSpec"
    title: Optional[str] = None
    template_override: Optional[Path] = None
    ssid: str = field(default="", compare=False)

    @property
    def display_title(self) -> str:
        return self.title or self.ssid
