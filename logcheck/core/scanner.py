from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Optional, Tuple

from ..patterns.base import SeverityMatcher
from ..patterns.severity import SubstringMatcher
from .errors import ConfigurationError
from .models import LogEntry, ScanResult
from .timestamps import TimestampExtractor
from .utils import DEFAULT_ENCODING, decode_lossy, is_line_compatible, sample_encoding


DEFAULT_LOGGER_NAME = "logcheck"
AUTO_ENCODING = "auto"
CONTINUATION_MARKER = b"\t"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    The check runs from schedulers where ``logging.basicConfig`` was never
    called, so this attaches a stderr handler once. ``verbose`` lowers the
    level from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


def resolve_start_offset(offset: int, size: int) -> Tuple[int, bool]:
    """Return ``(effective_offset, rotated)``.

    A stored offset past the end of the file means it was truncated or
    replaced since the last run, so scanning restarts at 0. A replacement
    that is already as large as the old offset is indistinguishable from
    growth and goes unnoticed.
    """
    if offset > size:
        return 0, True
    return max(offset, 0), False


class IncrementalScanner:
    def __init__(
        self,
        matcher: Optional[SeverityMatcher] = None,
        extractor: Optional[TimestampExtractor] = None,
        *,
        encoding: str = DEFAULT_ENCODING,
        count_untimed: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if encoding != AUTO_ENCODING and not is_line_compatible(encoding):
            raise ConfigurationError(f"Unsupported encoding: {encoding} is not ASCII-compatible")
        self.matcher = matcher or SubstringMatcher()
        self.extractor = extractor or TimestampExtractor()
        self.encoding = encoding
        self.count_untimed = count_untimed
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def scan(self, path: Path, start_offset: int, now: float, entry_age: int) -> ScanResult:
        """Scan ``path`` from ``start_offset`` to the current end of file.

        A final line without a newline is consumed and classified like any
        other. Every line, continuation lines included, advances
        ``bytes_consumed`` by its raw size so ``result.end_offset`` matches the
        file position reached.
        OSError from opening or reading propagates to the caller.
        """
        cutoff = now - entry_age
        started = time.perf_counter()
        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            offset, rotated = resolve_start_offset(start_offset, size)
            if rotated:
                self.logger.info(
                    "%s shrank below stored offset %d (size %d); rescanning from the start",
                    path,
                    start_offset,
                    size,
                )
            f.seek(offset)
            encoding = self._resolve_encoding(f, path)
            result = ScanResult(start_offset=offset, rotated=rotated)

            for raw in f:
                result.bytes_consumed += len(raw)
                if raw.startswith(CONTINUATION_MARKER):
                    continue
                entry = self._classify(raw, encoding, now)
                result.entries += 1
                if not entry.timestamp.parsed:
                    result.untimed_entries += 1
                    if not self.count_untimed:
                        continue
                elif entry.timestamp.epoch < cutoff:
                    result.expired_entries += 1
                    continue
                if entry.warning:
                    result.warning_count += 1
                if entry.error:
                    result.error_count += 1

        self._log_summary(path, result, time.perf_counter() - started)
        return result

    def _classify(self, raw: bytes, encoding: str, now: float) -> LogEntry:
        line = decode_lossy(raw, encoding)
        timestamp = self.extractor.extract(line, now)
        warning, error = self.matcher.classify(line)
        return LogEntry(timestamp=timestamp, warning=warning, error=error, byte_length=len(raw))

    def _resolve_encoding(self, f, path: Path) -> str:
        if self.encoding != AUTO_ENCODING:
            return self.encoding
        detected = sample_encoding(f)
        self.logger.info("Detected encoding %s for %s", detected, path)
        return detected

    def _log_summary(self, path: Path, result: ScanResult, duration: float) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug(
            "Scanned %s from %d: %d bytes, entries=%d, untimed=%d, expired=%d, warnings=%d, errors=%d",
            path,
            result.start_offset,
            result.bytes_consumed,
            result.entries,
            result.untimed_entries,
            result.expired_entries,
            result.warning_count,
            result.error_count,
        )
        if duration >= self._slow_log_threshold:
            self.logger.debug("Slow scan for %s took %.2fs", path, duration)
