"""One emitter per output format."""

from __future__ import annotations

from typing import Dict, Optional

from rich.console import Console

from ..config import Settings
from ..formats import OutputFormat
from .base import Emitter
from .console import ConsoleEmitter, render_console
from .pdf import PdfEmitter
from .raster import JpgEmitter, PngEmitter, render_qr_image
from .svg import SvgEmitter, qr_matrix_to_svg

__all__ = [
    "ConsoleEmitter",
    "Emitter",
    "JpgEmitter",
    "PdfEmitter",
    "PngEmitter",
    "SvgEmitter",
    "default_emitters",
    "qr_matrix_to_svg",
    "render_console",
    "render_qr_image",
]


def default_emitters(settings: Settings, console: Optional[Console] = None) -> Dict[OutputFormat, Emitter]:
    return {
        OutputFormat.PNG: PngEmitter(settings.box_size),
        OutputFormat.JPG: JpgEmitter(settings.box_size, settings.jpeg_quality),
        OutputFormat.SVG: SvgEmitter(float(settings.box_size)),
        OutputFormat.CONSOLE: ConsoleEmitter(console, settings.console_invert),
        OutputFormat.PDF: PdfEmitter(
            settings.latex_command,
            settings.compile_timeout_seconds,
            settings.box_size,
        ),
    }
