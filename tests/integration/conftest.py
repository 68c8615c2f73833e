import sys
import subprocess
import time
from pathlib import Path

import pytest


@pytest.fixture()
def run_cli():
    """
    Run the CLI as a subprocess: python -m logcheck.cli <args>
    Returns CompletedProcess with stdout/stderr text captured.
    """
    def _run(args, cwd=None, env=None, timeout=60):
        cmd = [sys.executable, "-m", "logcheck.cli"] + list(map(str, args))
        return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, timeout=timeout)
    return _run


@pytest.fixture()
def state_dir(tmp_path: Path) -> Path:
    return tmp_path / "state"


@pytest.fixture()
def now() -> int:
    return int(time.time())
