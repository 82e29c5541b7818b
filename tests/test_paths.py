from pathlib import Path

import pytest

from qrlan.formats import DEFAULT_FORMATS, OutputFormat, RenderRequest
from qrlan.paths import PathKind, PathSpec, base_name, resolve, sanitize_name


@pytest.mark.parametrize(
    "ssid,expected",
    [
        ("Home", "home"),
        ("Home Net;1", "home_net_1"),
        ("  Café / Gäste  ", "café_gäste"),
        ("../../etc", "etc"),
        (";;;", "wifi"),
    ],
)
def test_sanitize_name(ssid, expected):
    assert sanitize_name(ssid) == expected


def test_directory_target_uses_ssid(tmp_path):
    spec = PathSpec.directory(tmp_path)
    assert resolve(spec, OutputFormat.PNG, "Home Net;1", Path("/unused")) == tmp_path / "home_net_1_qrcode.png"
    assert resolve(spec, OutputFormat.PDF, "Home Net;1", Path("/unused")) == tmp_path / "home_net_1_qrcode.pdf"


def test_file_target_swaps_extension_per_format(tmp_path):
    spec = PathSpec.file(tmp_path / "lobby.png")
    assert resolve(spec, OutputFormat.PNG, "Home", tmp_path) == tmp_path / "lobby.png"
    assert resolve(spec, OutputFormat.SVG, "Home", tmp_path) == tmp_path / "lobby.svg"
    assert resolve(PathSpec.file(tmp_path / "lobby"), OutputFormat.JPG, "Home", tmp_path) == tmp_path / "lobby.jpg"


def test_default_target_uses_default_directory(tmp_path):
    assert resolve(PathSpec.default(), OutputFormat.SVG, "Home", tmp_path) == tmp_path / f"{base_name('Home')}.svg"


def test_console_has_no_target(tmp_path):
    for spec in (PathSpec.default(), PathSpec.directory(tmp_path), PathSpec.file(tmp_path / "x.png")):
        assert resolve(spec, OutputFormat.CONSOLE, "Home", tmp_path) is None


class TestFromArgument:
    def test_empty_is_default(self):
        assert PathSpec.from_argument(None).kind is PathKind.DEFAULT
        assert PathSpec.from_argument("").kind is PathKind.DEFAULT

    def test_existing_directory(self, tmp_path):
        assert PathSpec.from_argument(str(tmp_path)) == PathSpec.directory(tmp_path)

    def test_trailing_separator_is_directory(self, tmp_path):
        spec = PathSpec.from_argument(str(tmp_path / "new") + "/")
        assert spec.kind is PathKind.DIRECTORY
        assert spec.path == tmp_path / "new"

    def test_anything_else_is_file(self, tmp_path):
        assert PathSpec.from_argument(str(tmp_path / "code.png")) == PathSpec.file(tmp_path / "code.png")


def test_output_format_order_and_extension():
    shuffled = [OutputFormat.PDF, OutputFormat.CONSOLE, OutputFormat.PNG, OutputFormat.SVG, OutputFormat.JPG]
    assert OutputFormat.ordered(shuffled) == list(OutputFormat)
    assert OutputFormat.JPG.extension == "jpg"
    assert OutputFormat.CONSOLE.extension is None
    assert DEFAULT_FORMATS == {OutputFormat.PDF}


def test_display_title_falls_back_to_ssid():
    request = RenderRequest("WIFI:T:nopass;S:Cafe;;", DEFAULT_FORMATS, PathSpec.default(), ssid="Cafe")
    assert request.display_title == "Cafe"
    assert RenderRequest("p", DEFAULT_FORMATS, PathSpec.default(), title="Lobby", ssid="Cafe").display_title == "Lobby"
