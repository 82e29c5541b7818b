"""Runtime configuration.

Every value can be overridden with a ``QRLAN_``-prefixed environment variable
or a ``.env`` file in the working directory, e.g. ``QRLAN_LATEX_COMMAND=xelatex``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .i18n import Language


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QRLAN_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    latex_command: str = Field(
        default="pdflatex",
        min_length=1,
        description="Executable used to compile the PDF template.",
    )
    compile_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for one compiler run (seconds).",
    )
    command_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Upper bound for each OS credential-store query (seconds).",
    )

    box_size: int = Field(default=10, ge=1, le=100, description="Pixels per QR module in raster output.")
    border: int = Field(default=4, ge=0, le=20, description="Quiet-zone width in modules.")
    error_correction: str = Field(default="M", description="QR error correction level (L/M/Q/H).")
    # 95 with 4:4:4 chroma keeps module edges crisp; below 70 artefacts bleed across modules.
    jpeg_quality: int = Field(default=95, ge=70, le=100, description="JPEG quality for JPG output.")
    console_invert: bool = Field(
        default=True,
        description="Draw light modules as blocks so the code scans on dark terminals.",
    )

    language: Language = Field(default=Language.ENGLISH, description="Language of user-facing labels.")
    output_dir: Optional[Path] = Field(
        default=None,
        description="Default save location; falls back to the Desktop, then the working directory.",
    )
    log_level: str = Field(default="WARNING", description="Root log level for the CLI.")

    @field_validator("error_correction")
    @classmethod
    def _check_error_correction(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in {"L", "M", "Q", "H"}:
            raise ValueError("error_correction must be one of L, M, Q, H")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        return value.strip().upper()


def default_save_dir(settings: Settings) -> Path:
    """Directory used when no output path is given."""
    if settings.output_dir is not None:
        return settings.output_dir
    desktop = Path.home() / "Desktop"
    if desktop.is_dir():
        return desktop
    return Path.cwd()
