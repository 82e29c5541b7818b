"""Contracts shared by every credential source.

A source knows how to list the Wi-Fi networks stored on the host and how to
read the passphrase of one of them. OS-level failures are converted to the
error taxonomy here, at the source boundary, so the pipeline never sees a
``subprocess`` or ``OSError`` exception.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, runtime_checkable

from ..errors import SourceUnavailable
from ..payload import Security

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True)
class KnownNetwork:
    ssid: str
    security: Optional[Security] = None
    hidden: bool = False


@dataclass(frozen=True)
class Discovery:
    """Networks returned by ``list_known`` plus the reason the query failed, if it did."""

    networks: Sequence[KnownNetwork] = field(default_factory=tuple)
    error: Optional[SourceUnavailable] = None

    def __iter__(self) -> Iterator[KnownNetwork]:
        return iter(self.networks)

    def __len__(self) -> int:
        return len(self.networks)

    def __getitem__(self, index: int) -> KnownNetwork:
        return self.networks[index]

    @property
    def available(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: SourceUnavailable) -> "Discovery":
        return cls((), error)


@runtime_checkable
class CredentialSource(Protocol):
    name: str

    def list_known(self) -> Discovery:
        """List stored networks; OS failures yield an empty, failed Discovery."""
        ...

    def fetch_secret(self, ssid: str) -> Optional[str]:
        """Return the stored passphrase, ``None`` if there is none.

        Raises ``AccessDenied`` or ``NotFound``.
        """
        ...


class CommandSource:
    """Base for sources backed by OS command-line tools."""

    name = "command"
    encoding = "utf-8"

    def __init__(self, runner: Runner = subprocess.run, timeout: float = 15.0):
        self._runner = runner
        self._timeout = timeout

    def run(self, args: List[str]) -> "subprocess.CompletedProcess[str]":
        """Run ``args`` and return the completed process whatever its exit code.

        A missing executable or an expired timeout raises :class:`SourceUnavailable`.
        """

        logger.debug("Running %s", args[:3])
        try:
            return self._runner(
                args,
                capture_output=True,
                text=True,
                encoding=self.encoding,
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise SourceUnavailable(f"'{args[0]}' is not available on this system") from exc
        except subprocess.TimeoutExpired as exc:
            raise SourceUnavailable(f"'{args[0]}' did not answer within {self._timeout:g}s") from exc
        except OSError as exc:
            raise SourceUnavailable(f"failed to execute '{args[0]}': {exc}") from exc

    def run_checked(self, args: List[str]) -> str:
        """Like :meth:`run` but a non-zero exit also raises :class:`SourceUnavailable`."""
        result = self.run(args)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise SourceUnavailable(
                f"'{' '.join(args[:3])}' failed with exit code {result.returncode}: {detail}"
            )
        return result.stdout or ""

    def list_known(self) -> Discovery:
        try:
            networks = self._query_networks()
        except SourceUnavailable as exc:
            logger.warning("%s credential store unavailable: %s", self.name, exc.message)
            return Discovery.failed(exc)
        logger.info("%s source listed %d network(s)", self.name, len(networks))
        return Discovery(tuple(networks))

    def _query_networks(self) -> List[KnownNetwork]:
        raise NotImplementedError

    def fetch_secret(self, ssid: str) -> Optional[str]:
        raise NotImplementedError
