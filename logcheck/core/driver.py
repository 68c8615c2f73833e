from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Optional

from .config import CheckConfig
from .freshness import is_stale
from .loader import load_matcher
from .models import CheckOutcome, FileReport, ScanState
from .scanner import DEFAULT_LOGGER_NAME, IncrementalScanner
from .state import StateStore, canonical_key


class CheckDriver:
    """Runs one check: staleness, incremental scan and watermark update per logfile.

    Every per-file failure is folded into that file's ``FileReport`` so one bad
    file cannot abort the run.
    """

    def __init__(
        self,
        config: CheckConfig,
        *,
        store: Optional[StateStore] = None,
        scanner: Optional[IncrementalScanner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.store = store or StateStore(config.state_store, logger=base_logger)
        self.scanner = scanner or IncrementalScanner(
            load_matcher(config.matcher),
            encoding=config.encoding,
            count_untimed=config.count_untimed,
            logger=base_logger,
        )

    def run(self, now: Optional[float] = None) -> CheckOutcome:
        return self.run_files([self.config.logfile], now=now)

    def run_files(self, logfiles: Iterable[Path], now: Optional[float] = None) -> CheckOutcome:
        now = time.time() if now is None else now
        outcome = CheckOutcome()
        for logfile in logfiles:
            outcome.reports.append(self.check_file(Path(logfile), now))
        return outcome

    def check_file(self, logfile: Path, now: float) -> FileReport:
        report = FileReport(path=logfile)

        try:
            mtime = logfile.stat().st_mtime
        except OSError as exc:
            return self._fail(report, f"Could not open file {logfile}: {_reason(exc)}", exc)

        if is_stale(mtime, now, self.config.logfile_age):
            report.stale = True
            report.messages.append(
                f"Warning: logfile {logfile} has not been modified within "
                f"{self.config.logfile_age} seconds."
            )

        key = canonical_key(logfile)
        previous = ScanState(offset=self.store.load(key))
        try:
            result = self.scanner.scan(logfile, previous.offset, now, self.config.entry_age)
        except OSError as exc:
            return self._fail(report, f"Could not open file {logfile}: {_reason(exc)}", exc)

        report.result = result
        report.warnings = result.warning_count
        report.errors = result.error_count

        try:
            self.store.save(key, result.end_offset)
        except OSError as exc:
            return self._fail(report, f"Could not save state for {logfile}: {_reason(exc)}", exc)
        report.state = ScanState(offset=result.end_offset)
        return report

    def _fail(self, report: FileReport, message: str, exc: BaseException) -> FileReport:
        report.failed = True
        report.messages.append(message)
        if self.config.verbose:
            self.logger.warning(message, exc_info=exc)
        else:
            self.logger.warning(message)
        return report


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)
