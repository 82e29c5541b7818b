"""Terminal interaction (Rich): prompts and the final report table."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .errors import InvalidInput
from .i18n import Language, translate
from .payload import Credential, Security, validate_passphrase
from .pipeline import Report
from .sources import KnownNetwork, ManualSource


class RichPrompter:
    """Asks the user for whatever the credential source could not provide."""

    def __init__(self, console: Optional[Console] = None, language: Language = Language.ENGLISH):
        self.console = console or Console(stderr=True)
        self.language = language

    def _(self, key: str) -> str:
        return translate(key, self.language)

    def notify(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)

    def _error(self, message: str) -> None:
        self.console.print(f"[red]{self._('Invalid input')}:[/red] {escape(message)}", highlight=False)

    def select_network(self, networks: Sequence[KnownNetwork]) -> Optional[KnownNetwork]:
        table = Table(title=self._("Available Wi-Fi networks"))
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("SSID", style="white")
        table.add_column("Security", style="dim")
        for index, network in enumerate(networks):
            table.add_row(str(index), escape(network.ssid), network.security.label if network.security else "?")
        self.console.print(table)

        choices = [str(index) for index in range(len(networks))] + ["m"]
        answer = Prompt.ask(
            f"{self._('Select a network by number')} (m = manual)",
            choices=choices,
            show_choices=False,
            console=self.console,
        )
        if answer == "m":
            return None
        return networks[int(answer)]

    def manual_entry(self) -> Optional[Credential]:
        if not Confirm.ask(self._("Would you like to enter the network manually?"), console=self.console):
            return None
        source = ManualSource()
        while True:
            ssid = Prompt.ask(self._("Enter the SSID"), console=self.console)
            passphrase = Prompt.ask(
                self._("Enter the password (leave empty for an open network)"),
                password=True,
                default="",
                show_default=False,
                console=self.console,
            )
            security = self.ask_security(ssid) if passphrase else Security.OPEN
            hidden = Confirm.ask(self._("Is the network hidden?"), default=False, console=self.console)
            try:
                return source.credential(ssid, passphrase or None, security, hidden)
            except InvalidInput as exc:
                self._error(exc.message)

    def ask_passphrase(self, ssid: str, security: Optional[Security]) -> str:
        while True:
            passphrase = Prompt.ask(
                f"{self._('Enter the password (leave empty for an open network)')} ({escape(ssid)})",
                password=True,
                default="",
                show_default=False,
                console=self.console,
            )
            if security is None or security is Security.OPEN:
                return passphrase
            try:
                return validate_passphrase(passphrase, security) or ""
            except InvalidInput as exc:
                self._error(exc.message)

    def ask_security(self, ssid: str) -> Security:
        while True:
            answer = Prompt.ask(
                f"{self._('Security type (WPA, WEP or nopass)')} ({escape(ssid)})",
                default="WPA",
                console=self.console,
            )
            try:
                return Security.parse(answer)
            except InvalidInput as exc:
                self._error(exc.message)

    def ask_title(self, default: str) -> str:
        return Prompt.ask(self._("Title for the PDF"), default=default, console=self.console)


def build_report_table(report: Report, language: Language = Language.ENGLISH) -> Table:
    """One row per requested format: status and written path or failure reason."""

    table = Table(title="qrlan")
    table.add_column(translate("Format", language), style="cyan", no_wrap=True)
    table.add_column(translate("Status", language), no_wrap=True)
    table.add_column(translate("Details", language), style="dim")
    for result in report.results:
        if result.ok:
            detail = escape(str(result.path)) if result.path else translate("printed to console", language)
            table.add_row(result.format.value.upper(), f"[green]{translate('OK', language)}[/green]", detail)
        else:
            table.add_row(
                result.format.value.upper(),
                f"[red]{translate('FAILED', language)}[/red]",
                escape(f"{type(result.error).__name__}: {result.error.reason}"),
            )
    return table
