"""Command line interface for generating Wi-Fi QR codes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set

from rich.console import Console
from rich.markup import escape

from . import __version__, templates
from .config import Settings
from .emitters import default_emitters
from .errors import InvalidInput
from .formats import OutputFormat
from .paths import PathSpec
from .pipeline import Pipeline
from .sources import ManualSource, detect_source
from .ui import RichPrompter, build_report_table

_FORMAT_FLAGS = {
    "png": OutputFormat.PNG,
    "jpg": OutputFormat.JPG,
    "svg": OutputFormat.SVG,
    "show": OutputFormat.CONSOLE,
    "pdf": OutputFormat.PDF,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrlan",
        description="Generate a QR code that joins a stored or manually entered Wi-Fi network",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-o",
        "--output-path",
        help="Output directory (file name derived from the SSID) or full file path; defaults to the Desktop",
    )

    formats = parser.add_argument_group("output formats", "Combine freely; PDF is used when none is given")
    formats.add_argument("--png", action="store_true", help="Write a PNG image")
    formats.add_argument("--jpg", action="store_true", help="Write a JPG image")
    formats.add_argument("--svg", action="store_true", help="Write an SVG image")
    formats.add_argument("--show", action="store_true", help="Print the QR code to the console")
    formats.add_argument("--pdf", action="store_true", help="Write a PDF compiled with LaTeX")
    formats.add_argument("--design", type=Path, help="Custom LaTeX template for PDF output")
    formats.add_argument("--title", help="Title shown on the PDF and under the console code (defaults to the SSID)")

    manual = parser.add_argument_group("manual entry", "Skip the stored networks and encode these credentials")
    manual.add_argument("--ssid", help="Wi-Fi SSID")
    manual.add_argument("--password", help="Wi-Fi password (8-63 characters)")
    manual.add_argument("--security", help="Wi-Fi authentication (WPA/WEP/nopass); inferred from --password if omitted")
    manual.add_argument("--hidden", action="store_true", help="Mark the Wi-Fi network as hidden")

    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    return parser


def selected_formats(args: argparse.Namespace) -> Set[OutputFormat]:
    return {fmt for flag, fmt in _FORMAT_FLAGS.items() if getattr(args, flag)}


def configure_logging(settings: Settings, verbosity: int) -> None:
    level = {0: settings.log_level, 1: "INFO"}.get(verbosity, "DEBUG")
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings()
    configure_logging(settings, args.verbose)

    if args.design is not None:
        try:
            templates.load_template(args.design)
        except InvalidInput as exc:
            parser.exit(2, f"{parser.prog}: error: {exc.message}\n")
    destination = PathSpec.from_argument(args.output_path)

    credential = None
    if args.ssid is not None:
        source = ManualSource()
        prompter = None
        try:
            credential = source.credential(args.ssid, args.password or None, args.security, args.hidden)
        except InvalidInput as exc:
            parser.exit(2, f"{parser.prog}: error: {exc.message}\n")
    else:
        source = detect_source(timeout=settings.command_timeout_seconds)
        prompter = RichPrompter(language=settings.language)

    stdout = Console()
    stderr = Console(stderr=True)
    pipeline = Pipeline(source, prompter, settings, default_emitters(settings, stdout))
    try:
        report = pipeline.run(
            formats=selected_formats(args),
            destination=destination,
            title=args.title,
            template_override=args.design,
            credential=credential,
        )
    except InvalidInput as exc:
        stderr.print(f"[red]{parser.prog}: {escape(exc.message)}[/red]", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130

    stderr.print(build_report_table(report, settings.language))
    for result in report.failed:
        if result.error.message != result.error.reason:
            stderr.print(result.error.message, highlight=False, markup=False)
        output = getattr(result.error, "output", "")
        if output:
            stderr.rule(f"{result.format.value.upper()} compiler output")
            stderr.print(output, style="dim", highlight=False, markup=False)
    return report.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
