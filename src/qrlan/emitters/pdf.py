"""PDF output: fill the LaTeX template and compile it with an external compiler.

The compiler runs in a throw-away directory that holds the QR image, the
filled template and every auxiliary file LaTeX writes; the directory is
removed on success, on failure and on timeout alike.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..errors import CompilationFailed, OutputWriteError
from ..formats import RenderRequest
from .. import templates
from .base import writing
from .raster import render_qr_image

logger = logging.getLogger(__name__)

IMAGE_NAME = "qrcode.png"
TEX_NAME = "qrlan.tex"
LOG_TAIL_LINES = 40

INSTALL_HINT = """No LaTeX distribution was found. Ensure that the "{command}" command is available.

For Windows use:
MiKTeX (https://miktex.org/download)

For macOS use:
MacTeX (https://www.tug.org/mactex/mactex-download.html)

For Linux (Debian/Ubuntu) use:
sudo apt-get install texlive-latex-base texlive-fonts-recommended texlive-lang-english

For Linux (Fedora) use:
sudo dnf install texlive-scheme-basic texlive-collection-fontsrecommended texlive-collection-langenglish"""


def _decode(stream) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


def _log_tail(log_path: Path) -> str:
    try:
        lines = log_path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return ""
    return "\n".join(lines[-LOG_TAIL_LINES:])


class PdfEmitter:
    def __init__(
        self,
        command: str = "pdflatex",
        timeout: float = 60.0,
        box_size: int = 10,
        runner: Callable[..., "subprocess.CompletedProcess[str]"] = subprocess.run,
        which: Callable[[str], Optional[str]] = shutil.which,
    ):
        self.command = command
        self.timeout = timeout
        self.box_size = box_size
        self._runner = runner
        self._which = which

    def emit(self, matrix, request: RenderRequest, target: Optional[Path]) -> Path:
        template_source = templates.load_template(request.template_override)
        executable = self._which(self.command)
        if executable is None:
            raise CompilationFailed(INSTALL_HINT.format(command=self.command))

        with tempfile.TemporaryDirectory(prefix="qrlan-") as workdir:
            work = Path(workdir)
            try:
                render_qr_image(matrix, self.box_size).save(work / IMAGE_NAME, format="PNG")
                document = templates.render(
                    template_source,
                    {
                        templates.TITLE_PLACEHOLDER: templates.latex_escape(request.display_title),
                        templates.IMAGE_PLACEHOLDER: IMAGE_NAME,
                    },
                )
                (work / TEX_NAME).write_text(document, encoding="utf-8")
            except OSError as exc:
                raise OutputWriteError(f"cannot prepare temporary files: {exc}") from exc

            compiled = self._compile(executable, work)
            with writing(target):
                shutil.copyfile(compiled, target)
        logger.info("Compiled PDF written to %s", target)
        return target

    def _compile(self, executable: str, work: Path) -> Path:
        args = [
            executable,
            "-interaction=nonstopmode",
            "-halt-on-error",
            "-output-directory",
            str(work),
            str(work / TEX_NAME),
        ]
        logger.debug("Running %s", args)
        try:
            result = self._runner(
                args,
                cwd=str(work),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CompilationFailed(INSTALL_HINT.format(command=self.command)) from exc
        except subprocess.TimeoutExpired as exc:
            raise CompilationFailed(
                f"{self.command} did not finish within {self.timeout:g}s",
                output=_decode(exc.stdout) + _decode(exc.stderr),
            ) from exc
        except OSError as exc:
            raise CompilationFailed(f"failed to execute {self.command}: {exc}") from exc

        output = (result.stdout or "") + (result.stderr or "")
        pdf_path = work / (Path(TEX_NAME).stem + ".pdf")
        if result.returncode != 0:
            log_tail = _log_tail(work / (Path(TEX_NAME).stem + ".log"))
            raise CompilationFailed(
                f"{self.command} exited with status {result.returncode}",
                output="\n".join(part for part in (output, log_tail) if part),
                returncode=result.returncode,
            )
        if not pdf_path.is_file():
            raise CompilationFailed(f"{self.command} produced no PDF", output=output, returncode=0)
        return pdf_path
