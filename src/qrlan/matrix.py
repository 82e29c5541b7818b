"""QR matrix helpers on top of the ``qrcode`` package."""

from __future__ import annotations

from typing import Sequence, Tuple

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

Matrix = Tuple[Tuple[bool, ...], ...]

_ECC_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def build_matrix(payload: str, error_correction: str = "M", border: int = 4) -> Matrix:
    """Encode ``payload`` and return its module grid, quiet zone included."""
    try:
        ecl = _ECC_LEVELS[error_correction.upper()]
    except KeyError as exc:
        raise ValueError(f"unknown ECC level: {error_correction}") from exc
    if border < 0:
        raise ValueError("border must not be negative")
    qr = qrcode.QRCode(version=None, error_correction=ecl, box_size=1, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    return tuple(tuple(bool(cell) for cell in row) for row in qr.get_matrix())


def dark_modules(matrix: Sequence[Sequence[bool]]):
    """Yield the ``(x, y)`` coordinate of every dark module, row by row."""
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            if value:
                yield x, y
