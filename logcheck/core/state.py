from __future__ import annotations
import fcntl
import logging
import os
import re
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional, Union

from .scanner import DEFAULT_LOGGER_NAME

_DRIVE_RE = re.compile(r"^([A-Za-z]):[\\/]")

PathLike = Union[str, os.PathLike]


def canonical_key(logfile: PathLike) -> str:
    """Canonical absolute path used to identify a logfile's state record.

    Resolution is left to the host: on POSIX ``C:/app.log`` is a relative path
    into a directory named ``C:``, on Windows it is a drive path.
    """
    return os.path.realpath(os.path.abspath(os.fspath(logfile)))


def record_path(state_root: Path, key: PathLike) -> Path:
    """Map a canonical logfile path to its record below ``state_root``.

    POSIX paths are mirrored under ``posix/`` and drive-letter paths under
    ``drive_<LETTER>/``, so ``/C/app.log`` and ``C:/app.log`` never share a record.
    """
    raw = os.fspath(key)
    m = _DRIVE_RE.match(raw)
    if m:
        parts = PureWindowsPath(raw).parts[1:]
        return Path(state_root, f"drive_{m.group(1).upper()}", *parts)
    parts = PurePosixPath(raw).parts
    if parts and parts[0] == "/":
        parts = parts[1:]
    return Path(state_root, "posix", *parts)


def _parse_offset(text: str) -> Optional[int]:
    first = text.splitlines()[0].strip() if text else ""
    if not first.isdigit() or not first.isascii():
        return None
    return int(first)


class StateStore:
    """Byte-offset watermarks, one plain-text record per logfile.

    Readers take a shared ``flock`` and writers an exclusive one for the whole
    write, so a reader never sees a half-written offset. Nothing here stops two
    scanners of the same logfile from both reading the old offset first.
    """

    def __init__(self, root: Path, *, logger: Optional[logging.Logger] = None) -> None:
        self.root = Path(root)
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def path_for(self, key: PathLike) -> Path:
        return record_path(self.root, key)

    def load(self, key: PathLike) -> int:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="ascii", errors="replace") as f:
                fcntl.flock(f, fcntl.LOCK_SH)
                try:
                    text = f.read()
                finally:
                    fcntl.flock(f, fcntl.LOCK_UN)
        except FileNotFoundError:
            return 0
        except OSError as exc:
            self.logger.warning("Unable to read state record %s: %s", path, exc)
            return 0

        offset = _parse_offset(text)
        if offset is None:
            self.logger.warning("Ignoring corrupt state record %s", path)
            return 0
        return offset

    def save(self, key: PathLike, offset: int) -> None:
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        # No O_TRUNC: truncation happens only once the exclusive lock is held.
        fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        with os.fdopen(fd, "r+", encoding="ascii") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            try:
                f.seek(0)
                f.truncate()
                f.write(f"{offset}\n")
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)
