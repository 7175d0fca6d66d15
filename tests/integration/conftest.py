from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def run_cli():
    def run(*args: str, timeout: int = 60) -> subprocess.CompletedProcess:
        env = {k: v for k, v in os.environ.items() if k != "SPRINGER_API_KEY"}
        return subprocess.run(
            [sys.executable, "-m", "bibmesh.cli", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=PROJECT_ROOT,
            env=env,
        )

    return run
