import subprocess
from typing import Dict, List, Tuple

import pytest

from qrlan.config import Settings
from qrlan.matrix import build_matrix


class FakeRunner:
    """Stand-in for ``subprocess.run`` answering by command prefix."""

    def __init__(self, responses: Dict[Tuple[str, ...], Tuple[int, str, str]]):
        self.responses = responses
        self.calls: List[List[str]] = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        best = None
        for prefix, response in self.responses.items():
            if tuple(args[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best[0])):
                best = (prefix, response)
        if best is None:
            raise FileNotFoundError(args[0])
        returncode, stdout, stderr = best[1]
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def settings(tmp_path):
    return Settings(output_dir=tmp_path, latex_command="pdflatex", box_size=4)


@pytest.fixture
def matrix():
    return build_matrix("WIFI:T:WPA;S:Home;P:password1;;")
