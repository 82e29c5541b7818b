"""Wi-Fi QR code generator: stored or entered credentials to PNG, JPG, SVG, console or PDF."""

__version__ = "1.0.0"

from .errors import (
    AccessDenied,
    CompilationFailed,
    InvalidInput,
    NotFound,
    OutputWriteError,
    QrlanError,
    SourceUnavailable,
)
from .formats import OutputFormat, RenderRequest
from .matrix import build_matrix
from .payload import Credential, Security, decode, encode

__all__ = [
    "AccessDenied",
    "CompilationFailed",
    "Credential",
    "InvalidInput",
    "NotFound",
    "OutputFormat",
    "OutputWriteError",
    "QrlanError",
    "RenderRequest",
    "Security",
    "SourceUnavailable",
    "build_matrix",
    "decode",
    "encode",
]
