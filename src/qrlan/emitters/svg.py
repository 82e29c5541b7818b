"""SVG output: one ``<rect>`` per dark module in module-unit coordinates."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from ..formats import RenderRequest
from ..matrix import dark_modules
from .base import writing


def qr_matrix_to_svg(matrix: Sequence[Sequence[bool]], module_size: float = 10.0, title: str = "") -> str:
    if module_size <= 0:
        raise ValueError("module_size must be positive")
    size = len(matrix)
    if size == 0:
        raise ValueError("matrix must not be empty")

    extent = size * module_size
    lines: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
            f'width="{extent:g}" height="{extent:g}" viewBox="0 0 {size} {size}" '
            f'shape-rendering="crispEdges">'
        ),
    ]
    if title:
        lines.append(f"<title>{escape(title)}</title>")
    lines.append(f'<rect x="0" y="0" width="{size}" height="{size}" fill="#ffffff"/>')
    lines.append('<g fill="#000000">')
    lines.extend(f'<rect x="{x}" y="{y}" width="1" height="1"/>' for x, y in dark_modules(matrix))
    lines.append("</g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


class SvgEmitter:
    def __init__(self, module_size: float = 10.0):
        self.module_size = module_size

    def emit(self, matrix, request: RenderRequest, target: Optional[Path]) -> Path:
        svg_text = qr_matrix_to_svg(matrix, self.module_size, request.display_title)
        with writing(target):
            target.write_text(svg_text, encoding="utf-8")
        return target
