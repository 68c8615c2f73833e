from __future__ import annotations
import argparse
import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .loader import discover_matchers
from .scanner import AUTO_ENCODING
from .utils import DEFAULT_ENCODING, is_line_compatible


BASE_DIR = Path("/var/cache/check-logfile")
DEFAULT_STATE_STORE = BASE_DIR / "statefiles"
DEFAULT_LOGFILE_AGE = 3600
DEFAULT_ENTRY_AGE = 600
DEFAULT_MATCHER = "substring"


@dataclass(frozen=True)
class CheckConfig:
    logfile: Path
    state_store: Path = DEFAULT_STATE_STORE
    logfile_age: int = DEFAULT_LOGFILE_AGE
    entry_age: int = DEFAULT_ENTRY_AGE
    matcher: str = DEFAULT_MATCHER
    encoding: str = DEFAULT_ENCODING
    count_untimed: bool = True
    verbose: bool = False


def build_config(args: argparse.Namespace) -> CheckConfig:
    """Validate parsed CLI arguments and freeze them into a ``CheckConfig``.

    Raises ``ConfigurationError`` for anything that would make a scan
    meaningless: no logfile, negative ages, an unknown matcher or encoding.
    """

    logfile: Optional[Path] = getattr(args, "logfile", None)
    if not logfile:
        raise ConfigurationError("No log file specified")

    for name in ("logfile_age", "entry_age"):
        if getattr(args, name) < 0:
            raise ConfigurationError(f"--{name.replace('_', '-')} must be zero or greater")

    matcher = (args.matcher or DEFAULT_MATCHER).strip().lower()
    if matcher not in discover_matchers():
        raise ConfigurationError(f"Unknown matcher: {args.matcher}")

    encoding = (args.encoding or DEFAULT_ENCODING).strip().lower()
    if encoding != AUTO_ENCODING:
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ConfigurationError(f"Unknown encoding: {args.encoding}") from None
        if not is_line_compatible(encoding):
            raise ConfigurationError(f"Unsupported encoding: {args.encoding} is not ASCII-compatible")

    return CheckConfig(
        logfile=Path(logfile),
        state_store=Path(args.state_store),
        logfile_age=int(args.logfile_age),
        entry_age=int(args.entry_age),
        matcher=matcher,
        encoding=encoding,
        count_untimed=not args.skip_untimed,
        verbose=bool(args.verbose),
    )
