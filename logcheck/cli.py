import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import (
    DEFAULT_ENCODING,
    DEFAULT_ENTRY_AGE,
    DEFAULT_LOGFILE_AGE,
    DEFAULT_MATCHER,
    DEFAULT_STATE_STORE,
    build_config,
)
from .core.driver import CheckDriver
from .core.errors import ConfigurationError
from .core.reporting import Reporter, Status
from .core.scanner import configure_logging


class CheckArgumentParser(argparse.ArgumentParser):
    # Usage errors are configuration errors: exit UNKNOWN rather than argparse's 2 (CRITICAL).
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(int(Status.UNKNOWN), f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    p = CheckArgumentParser(
        prog="check-logfile",
        description="Count new WARNING and ERROR entries in a logfile since the last run and check it is still being written.",
    )
    p.add_argument("-f", "--logfile", type=Path, default=None, help="The full path to the logfile to be scanned.")
    p.add_argument("-s", "--state-store", type=Path, default=DEFAULT_STATE_STORE, help=f"Directory used for storing state files (default: {DEFAULT_STATE_STORE}).")
    p.add_argument("-l", "--logfile-age", type=int, default=DEFAULT_LOGFILE_AGE, help="Seconds without a logfile update before raising a warning.")
    p.add_argument("-e", "--entry-age", type=int, default=DEFAULT_ENTRY_AGE, help="Age in seconds of the oldest log entry that will be checked.")
    p.add_argument("-m", "--matcher", default=DEFAULT_MATCHER, help="Severity matcher: 'substring', 'word' or 'nocase'.")
    p.add_argument("--encoding", default=DEFAULT_ENCODING, help="Logfile text encoding, or 'auto' to detect it.")
    p.add_argument("--skip-untimed", action="store_true", help="Do not count entries without a recognised timestamp.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output.")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    reporter = Reporter()
    logger = configure_logging(verbose=args.verbose)

    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(reporter.render(Status.UNKNOWN, str(exc)))
        return int(Status.UNKNOWN)

    outcome = CheckDriver(config, logger=logger).run()
    status, line = reporter.report(outcome)
    print(line)
    return int(status)


if __name__ == "__main__":
    raise SystemExit(main())
