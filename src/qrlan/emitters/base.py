"""Emitter contract and shared file helpers."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol

from ..errors import OutputWriteError
from ..formats import RenderRequest
from ..matrix import Matrix


class Emitter(Protocol):
    def emit(self, matrix: Matrix, request: RenderRequest, target: Optional[Path]) -> Optional[Path]:
        """Write ``matrix`` to ``target`` and return the written path."""
        ...


@contextmanager
def writing(target: Path) -> Iterator[Path]:
    """Create the parent directory of ``target`` and turn ``OSError`` into ``OutputWriteError``."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        yield target
    except OSError as exc:
        raise OutputWriteError(f"cannot write {target}: {exc.strerror or exc}") from exc
