from datetime import datetime
from pathlib import Path

import pytest


def local_epoch(*fields) -> int:
    """Epoch seconds for a naive local datetime, matching how syslog stamps are read."""
    return int(datetime(*fields).timestamp())


@pytest.fixture()
def logfile(tmp_path: Path) -> Path:
    return tmp_path / "app.log"


@pytest.fixture()
def state_root(tmp_path: Path) -> Path:
    return tmp_path / "state"
