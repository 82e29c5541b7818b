from pathlib import Path

import pytest
from pydantic import ValidationError

from qrlan.config import Settings, default_save_dir
from qrlan.i18n import Language, translate


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("QRLAN_LATEX_COMMAND", "QRLAN_OUTPUT_DIR", "QRLAN_LANGUAGE", "QRLAN_ERROR_CORRECTION", "QRLAN_BOX_SIZE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.latex_command == "pdflatex"
    assert settings.error_correction == "M"
    assert settings.jpeg_quality == 95
    assert settings.console_invert is True
    assert settings.language is Language.ENGLISH


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("QRLAN_LATEX_COMMAND", "xelatex")
    monkeypatch.setenv("QRLAN_ERROR_CORRECTION", "q")
    monkeypatch.setenv("QRLAN_LANGUAGE", "de")
    monkeypatch.setenv("QRLAN_OUTPUT_DIR", str(tmp_path))

    settings = Settings()

    assert settings.latex_command == "xelatex"
    assert settings.error_correction == "Q"
    assert settings.language is Language.GERMAN
    assert default_save_dir(settings) == tmp_path


def test_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("QRLAN_BOX_SIZE=3\n", encoding="utf-8")
    assert Settings().box_size == 3


@pytest.mark.parametrize("field,value", [("error_correction", "Z"), ("box_size", 0), ("jpeg_quality", 10)])
def test_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_default_save_dir_prefers_desktop(tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert default_save_dir(Settings()) == tmp_path

    (tmp_path / "Desktop").mkdir()
    assert default_save_dir(Settings()) == tmp_path / "Desktop"


def test_translate():
    assert translate("Enter the SSID", Language.GERMAN) == "SSID eingeben"
    assert translate("Enter the SSID", Language.ENGLISH) == "Enter the SSID"
    assert translate("unknown phrase", Language.GERMAN) == "unknown phrase"
