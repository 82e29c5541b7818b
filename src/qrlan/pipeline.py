"""Orchestration of one invocation.

``SelectSource -> ObtainCredential -> Encode -> ResolveFormats -> EmitEach -> Report``

Each requested format is emitted independently: an error in one is recorded
in the report and never stops the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from . import paths
from .config import Settings, default_save_dir
from .emitters import Emitter, default_emitters
from .errors import InvalidInput, OutputWriteError, QrlanError, SecretUnavailable, SourceUnavailable
from .formats import DEFAULT_FORMATS, OutputFormat, RenderRequest
from .matrix import build_matrix
from .payload import Credential, Security, encode
from .sources import CredentialSource, KnownNetwork

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    """Interactive collaborator asking the user for missing pieces."""

    def select_network(self, networks: Sequence[KnownNetwork]) -> Optional[KnownNetwork]: ...

    def manual_entry(self) -> Optional[Credential]: ...

    def ask_passphrase(self, ssid: str, security: Optional[Security]) -> str: ...

    def ask_security(self, ssid: str) -> Security: ...

    def ask_title(self, default: str) -> str: ...

    def notify(self, message: str) -> None: ...


@dataclass(frozen=True)
class FormatResult:
    format: OutputFormat
    path: Optional[Path] = None
    error: Optional[QrlanError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Report:
    results: List[FormatResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[FormatResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[FormatResult]:
        return [result for result in self.results if not result.ok]

    @property
    def ok(self) -> bool:
        return bool(self.results) and not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class Pipeline:
    def __init__(
        self,
        source: CredentialSource,
        prompter: Optional[Prompter] = None,
        settings: Optional[Settings] = None,
        emitters: Optional[Dict[OutputFormat, Emitter]] = None,
    ):
        self.source = source
        self.prompter = prompter
        self.settings = settings or Settings()
        self.emitters = emitters if emitters is not None else default_emitters(self.settings)

    def _notify(self, message: str) -> None:
        if self.prompter is not None:
            self.prompter.notify(message)

    # ObtainCredential

    def obtain_credential(self) -> Credential:
        """Return a credential from the source, falling back once to manual entry."""
        network = self._select_network()
        if network is not None:
            try:
                return self._complete(network)
            except InvalidInput as exc:
                logger.warning("No usable credential for %r: %s", network.ssid, exc.message)
                self._notify(exc.message)
        return self._manual_entry()

    def _select_network(self) -> Optional[KnownNetwork]:
        discovery = self.source.list_known()
        if not discovery.available:
            self._notify(f"Error retrieving Wi-Fi networks: {discovery.error.message}")
        if len(discovery) == 0:
            return None
        if len(discovery) == 1:
            logger.info("Only one known network, selecting %r", discovery[0].ssid)
            return discovery[0]
        if self.prompter is None:
            return None
        return self.prompter.select_network(list(discovery))

    def _complete(self, network: KnownNetwork) -> Credential:
        if network.security is Security.OPEN:
            return Credential(network.ssid, None, Security.OPEN, network.hidden)

        passphrase: Optional[str] = None
        try:
            passphrase = self.source.fetch_secret(network.ssid)
        except (SecretUnavailable, SourceUnavailable) as exc:
            logger.warning("Could not read the stored password of %r: %s", network.ssid, exc.message)
            self._notify(exc.message)

        if not passphrase:
            if self.prompter is None:
                raise InvalidInput(f"no password available for '{network.ssid}'")
            passphrase = self.prompter.ask_passphrase(network.ssid, network.security)

        security = network.security
        if security is None:
            if not passphrase:
                security = Security.OPEN
            elif self.prompter is not None:
                security = self.prompter.ask_security(network.ssid)
            else:
                security = Security.WPA_WPA2_PERSONAL

        if security is Security.OPEN:
            return Credential(network.ssid, None, Security.OPEN, network.hidden)
        if not passphrase:
            raise InvalidInput(f"'{network.ssid}' is secured but no password was given")
        return Credential(network.ssid, passphrase, security, network.hidden)

    def _manual_entry(self) -> Credential:
        credential = self.prompter.manual_entry() if self.prompter is not None else None
        if credential is None:
            raise InvalidInput("no network selected")
        return credential

    # Encode, ResolveFormats, EmitEach

    def build_request(
        self,
        credential: Credential,
        formats: Optional[Iterable[OutputFormat]] = None,
        destination: Optional[paths.PathSpec] = None,
        title: Optional[str] = None,
        template_override: Optional[Path] = None,
    ) -> RenderRequest:
        requested = frozenset(formats or ()) or DEFAULT_FORMATS
        if title is None and OutputFormat.PDF in requested and self.prompter is not None:
            title = self.prompter.ask_title(credential.ssid) or None
        return RenderRequest(
            payload=encode(credential),
            formats=requested,
            destination=destination or paths.PathSpec.default(),
            title=title,
            template_override=template_override,
            ssid=credential.ssid,
        )

    def emit_all(self, request: RenderRequest) -> Report:
        matrix = build_matrix(request.payload, self.settings.error_correction, self.settings.border)
        default_dir = default_save_dir(self.settings)
        report = Report()
        for fmt in OutputFormat.ordered(request.formats):
            report.results.append(self._emit_one(fmt, matrix, request, default_dir))
        logger.info("%d of %d format(s) succeeded", len(report.succeeded), len(report.results))
        return report

    def _emit_one(self, fmt, matrix, request: RenderRequest, default_dir: Path) -> FormatResult:
        emitter = self.emitters.get(fmt)
        if emitter is None:
            return FormatResult(fmt, error=InvalidInput(f"no emitter registered for {fmt.value}"))
        target = paths.resolve(request.destination, fmt, request.ssid, default_dir)
        try:
            written = emitter.emit(matrix, request, target)
        except QrlanError as exc:
            logger.error("%s output failed: %s", fmt.value.upper(), exc.reason)
            logger.debug("%s failure details: %s", fmt.value, exc.to_dict())
            return FormatResult(fmt, target, exc)
        except OSError as exc:
            logger.error("%s output failed: %s", fmt.value.upper(), exc)
            return FormatResult(fmt, target, OutputWriteError(f"cannot write {target}: {exc}"))
        return FormatResult(fmt, written)

    def run(
        self,
        formats: Optional[Iterable[OutputFormat]] = None,
        destination: Optional[paths.PathSpec] = None,
        title: Optional[str] = None,
        template_override: Optional[Path] = None,
        credential: Optional[Credential] = None,
    ) -> Report:
        """Run one full invocation and return the per-format report.

        Raises ``InvalidInput`` when no credential can be obtained.
        """

        if credential is None:
            credential = self.obtain_credential()
        request = self.build_request(credential, formats, destination, title, template_override)
        return self.emit_all(request)
