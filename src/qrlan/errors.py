"""Error taxonomy shared by sources, emitters and the pipeline."""

from __future__ import annotations

from typing import Any, Dict, Optional


class QrlanError(Exception):
    """Base class for every recoverable qrlan error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def reason(self) -> str:
        """First line of the message, used in the per-format report."""
        return self.message.strip().splitlines()[0] if self.message.strip() else type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message, "details": self.details}


class SourceUnavailable(QrlanError):
    """The OS credential store could not be queried."""


class SecretUnavailable(QrlanError):
    """The passphrase of a known network could not be read."""


class AccessDenied(SecretUnavailable):
    """Reading the passphrase needs privileges the process does not have."""


class NotFound(SecretUnavailable):
    """The network is no longer present in the credential store."""


class InvalidInput(QrlanError, ValueError):
    """User-supplied SSID, passphrase, security type or path is invalid."""


class CompilationFailed(QrlanError):
    """The document compiler is missing, timed out or exited non-zero."""

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message, {"returncode": returncode})
        self.output = output
        self.returncode = returncode


class OutputWriteError(QrlanError):
    """The destination of one output format is not writable."""
