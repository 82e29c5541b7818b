import pytest

from qrlan import __main__ as cli
from qrlan import __version__
from qrlan.formats import OutputFormat
from qrlan.payload import Security
from qrlan.sources import Discovery, KnownNetwork


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("QRLAN_LATEX_COMMAND", "QRLAN_OUTPUT_DIR", "QRLAN_LANGUAGE"):
        monkeypatch.delenv(name, raising=False)


def test_selected_formats():
    args = cli.build_parser().parse_args(["--png", "--show", "--pdf"])
    assert cli.selected_formats(args) == {OutputFormat.PNG, OutputFormat.CONSOLE, OutputFormat.PDF}
    assert cli.selected_formats(cli.build_parser().parse_args([])) == set()


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_manual_png_into_directory(tmp_path):
    out = tmp_path / "codes"
    out.mkdir()

    code = cli.main(["--ssid", "Home Net", "--password", "password1", "--png", "--svg", "-o", str(out)])

    assert code == 0
    assert (out / "home_net_qrcode.png").is_file()
    assert (out / "home_net_qrcode.svg").is_file()


def test_manual_file_path(tmp_path):
    code = cli.main(["--ssid", "Cafe", "--jpg", "-o", str(tmp_path / "lobby.png")])
    assert code == 0
    assert (tmp_path / "lobby.jpg").is_file()


def test_show_prints_code(capsys):
    assert cli.main(["--ssid", "Cafe", "--show", "--title", "Guests"]) == 0
    out = capsys.readouterr().out
    assert "█" in out
    assert "Guests" in out


def test_invalid_password_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--ssid", "Home", "--password", "short", "--png"])
    assert excinfo.value.code == 2
    assert "8" in capsys.readouterr().err


def test_missing_design_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--ssid", "Home", "--password", "password1", "--design", str(tmp_path / "missing.tex")])
    assert excinfo.value.code == 2


def test_pdf_without_latex_fails_but_png_is_written(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("QRLAN_LATEX_COMMAND", "qrlan-test-no-such-latex")

    code = cli.main(["--ssid", "Home", "--password", "password1", "--png", "--pdf", "-o", str(tmp_path) + "/"])

    assert code == 1
    assert (tmp_path / "home_qrcode.png").is_file()
    assert not (tmp_path / "home_qrcode.pdf").exists()
    err = capsys.readouterr().err
    assert "No LaTeX distribution" in err
    assert "qrlan-test-no-such-latex" in err


class OneNetwork:
    name = "stub"

    def list_known(self):
        return Discovery((KnownNetwork("Lobby", Security.OPEN),))

    def fetch_secret(self, ssid):
        raise AssertionError("open networks have no secret")


def test_detected_source_is_used(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "detect_source", lambda timeout: OneNetwork())

    assert cli.main(["--svg", "-o", str(tmp_path)]) == 0
    assert (tmp_path / "lobby_qrcode.svg").is_file()
