"""LaTeX template loading and placeholder substitution."""

from __future__ import annotations

import logging
import re
from importlib import resources
from pathlib import Path
from typing import Mapping, Optional

from .errors import InvalidInput

logger = logging.getLogger(__name__)

TITLE_PLACEHOLDER = "QRLAN_PDF_TITLE"
IMAGE_PLACEHOLDER = "QR_CODE_IMAGE_PATH"
DEFAULT_TEMPLATE = "standard.tex"

# Backslash goes first so the escapes added afterwards are left alone.
_LATEX_ESCAPES = (
    ("\\", "\x00"),
    ("{", r"\{"),
    ("}", r"\}"),
    ("_", r"\_"),
    ("&", r"\&"),
    ("%", r"\%"),
    ("$", r"\$"),
    ("#", r"\#"),
    ("^", r"\textasciicircum{}"),
    ("~", r"\textasciitilde{}"),
    ("\x00", r"\textbackslash{}"),
)


def token(name: str) -> str:
    return "{{" + name + "}}"


def latex_escape(text: str) -> str:
    """Escape every character with a special meaning in LaTeX text mode."""
    for char, replacement in _LATEX_ESCAPES:
        text = text.replace(char, replacement)
    return text


def render(template_source: str, substitutions: Mapping[str, str]) -> str:
    """Replace each ``{{NAME}}`` token with its already escaped value.

    Substitution is a single pass, so a value that happens to contain a token
    is inserted verbatim.
    """

    if not substitutions:
        return template_source
    pattern = re.compile("|".join(re.escape(token(name)) for name in substitutions))
    return pattern.sub(lambda match: substitutions[match.group(0)[2:-2]], template_source)


def load_template(override: Optional[Path] = None) -> str:
    """Return the template source, either the bundled one or ``override``.

    A given override is never silently replaced by the default: a missing or
    unreadable file raises :class:`InvalidInput`.
    """

    if override is None:
        source = resources.files("qrlan.resources").joinpath(DEFAULT_TEMPLATE).read_text(encoding="utf-8")
    else:
        path = Path(override).expanduser()
        if not path.exists():
            raise InvalidInput(f"template file does not exist: {path}")
        if not path.is_file():
            raise InvalidInput(f"template path is not a file: {path}")
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidInput(f"template file cannot be read: {path} ({exc})") from exc

    if token(IMAGE_PLACEHOLDER) not in source:
        logger.warning("Template has no %s placeholder; the QR code will not appear", token(IMAGE_PLACEHOLDER))
    return source
