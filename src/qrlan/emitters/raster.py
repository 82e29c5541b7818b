"""PNG and JPG output via Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from PIL import Image, ImageDraw

from ..formats import RenderRequest
from ..matrix import dark_modules
from .base import writing

# Lowest JPEG quality that keeps module edges clean; combined with 4:4:4 chroma.
JPEG_QUALITY = 95


def render_qr_image(matrix: Sequence[Sequence[bool]], box_size: int = 10) -> Image.Image:
    """Rasterize ``matrix`` with ``box_size`` pixels per module."""
    size = len(matrix)
    image = Image.new("L", (size * box_size, size * box_size), 255)
    draw = ImageDraw.Draw(image)
    for x, y in dark_modules(matrix):
        left = x * box_size
        top = y * box_size
        draw.rectangle((left, top, left + box_size - 1, top + box_size - 1), fill=0)
    return image


class PngEmitter:
    def __init__(self, box_size: int = 10):
        self.box_size = box_size

    def emit(self, matrix, request: RenderRequest, target: Optional[Path]) -> Path:
        image = render_qr_image(matrix, self.box_size)
        with writing(target):
            image.save(target, format="PNG")
        return target


class JpgEmitter:
    def __init__(self, box_size: int = 10, quality: int = JPEG_QUALITY):
        self.box_size = box_size
        self.quality = quality

    def emit(self, matrix, request: RenderRequest, target: Optional[Path]) -> Path:
        image = render_qr_image(matrix, self.box_size).convert("RGB")
        with writing(target):
            image.save(target, format="JPEG", quality=self.quality, subsampling=0)
        return target
