"""Terminal output using half-block glyphs, two module rows per text line."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from ..formats import RenderRequest

# Indexed by (top painted, bottom painted).
_GLYPHS = {
    (False, False): " ",
    (True, False): "▀",
    (False, True): "▄",
    (True, True): "█",
}


def render_console(matrix: Sequence[Sequence[bool]], invert: bool = True) -> str:
    """Return ``matrix`` as text lines of ``" ▀▄█"``.

    With ``invert`` the light modules are painted, which is what scans on a
    terminal with a dark background.
    """

    size = len(matrix)
    lines = []
    for y in range(0, size, 2):
        top = matrix[y]
        bottom = matrix[y + 1] if y + 1 < size else [False] * len(top)
        lines.append(
            "".join(
                _GLYPHS[(upper != invert, lower != invert)]
                for upper, lower in zip(top, bottom)
            )
        )
    return "\n".join(lines)


def centered(text: str, width: int) -> str:
    if width <= len(text):
        return text
    return " " * ((width - len(text)) // 2) + text


class ConsoleEmitter:
    def __init__(self, console: Optional[Console] = None, invert: bool = True):
        self.console = console or Console()
        self.invert = invert

    def emit(self, matrix, request: RenderRequest, target: Optional[Path] = None) -> None:
        art = render_console(matrix, self.invert)
        width = max((len(line) for line in art.splitlines()), default=0)
        self.console.out("")
        self.console.out(art, highlight=False)
        if request.display_title:
            self.console.out(centered(request.display_title, width), highlight=False)
        return None
