import io
from pathlib import Path

import pytest
from rich.console import Console

from qrlan import ui
from qrlan.errors import CompilationFailed
from qrlan.formats import OutputFormat
from qrlan.i18n import Language
from qrlan.payload import Credential, Security
from qrlan.pipeline import FormatResult, Report
from qrlan.sources import KnownNetwork


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def answers(monkeypatch):
    """Queue of replies returned by ``Prompt.ask`` and ``Confirm.ask`` in order."""
    queue = []

    def reply(*args, **kwargs):
        return queue.pop(0)

    monkeypatch.setattr(ui.Prompt, "ask", reply)
    monkeypatch.setattr(ui.Confirm, "ask", reply)
    return queue


NETWORKS = [KnownNetwork("Home", Security.WPA_WPA2_PERSONAL), KnownNetwork("[bold]Cafe", None)]


def test_select_network_by_number(console, answers):
    answers.append("1")
    assert ui.RichPrompter(console).select_network(NETWORKS) == NETWORKS[1]
    assert "[bold]Cafe" in console.file.getvalue()


def test_select_manual(console, answers):
    answers.append("m")
    assert ui.RichPrompter(console).select_network(NETWORKS) is None


def test_passphrase_reprompts_until_valid(console, answers):
    answers.extend(["short", "long enough"])
    assert ui.RichPrompter(console).ask_passphrase("Home", Security.WPA_WPA2_PERSONAL) == "long enough"
    assert "Invalid input" in console.file.getvalue()


def test_security_reprompts(console, answers):
    answers.extend(["enterprise", "wep"])
    assert ui.RichPrompter(console).ask_security("Home") is Security.WEP


def test_manual_entry_declined(console, answers):
    answers.append(False)
    assert ui.RichPrompter(console).manual_entry() is None


def test_manual_entry(console, answers):
    answers.extend([True, "Lobby", "password1", "WPA", True])
    credential = ui.RichPrompter(console).manual_entry()
    assert credential == Credential("Lobby", "password1", Security.WPA_WPA2_PERSONAL, hidden=True)


def test_manual_open_network(console, answers):
    answers.extend([True, "Guest", "", False])
    assert ui.RichPrompter(console).manual_entry() == Credential("Guest", None, Security.OPEN)


def test_report_table(console):
    report = Report(
        [
            FormatResult(OutputFormat.PNG, Path("/tmp/home_qrcode.png")),
            FormatResult(OutputFormat.CONSOLE),
            FormatResult(OutputFormat.PDF, error=CompilationFailed("pdflatex exited with status 1\nmore")),
        ]
    )
    console.print(ui.build_report_table(report, Language.GERMAN))
    text = console.file.getvalue()

    assert "home_qrcode.png" in text
    assert "in der Konsole ausgegeben" in text
    assert "FEHLER" in text
    assert "CompilationFailed: pdflatex exited with status 1" in text
    assert "more" not in text
