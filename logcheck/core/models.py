from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Timestamp:
    display: str
    epoch: int

    @property
    def parsed(self) -> bool:
        return self.epoch >= 0


UNPARSEABLE = Timestamp(display="", epoch=-1)


@dataclass(frozen=True)
class ScanState:
    offset: int = 0


@dataclass(frozen=True)
class LogEntry:
    timestamp: Timestamp
    warning: bool
    error: bool
    byte_length: int


@dataclass
class ScanResult:
    warning_count: int = 0
    error_count: int = 0
    bytes_consumed: int = 0
    start_offset: int = 0  # effective offset after the rotation check
    rotated: bool = False
    entries: int = 0
    untimed_entries: int = 0
    expired_entries: int = 0

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.bytes_consumed


@dataclass
class FileReport:
    path: Path
    warnings: int = 0
    errors: int = 0
    stale: bool = False
    failed: bool = False
    messages: List[str] = field(default_factory=list)
    result: Optional[ScanResult] = None
    state: Optional[ScanState] = None  # persisted watermark, set once saved


@dataclass
class CheckOutcome:
    reports: List[FileReport] = field(default_factory=list)

    @property
    def total_warnings(self) -> int:
        return sum(r.warnings for r in self.reports)

    @property
    def total_errors(self) -> int:
        return sum(r.errors for r in self.reports)

    @property
    def stale_detected(self) -> bool:
        return any(r.stale for r in self.reports)

    @property
    def failed(self) -> bool:
        return any(r.failed for r in self.reports)

    @property
    def messages(self) -> List[str]:
        return [m for r in self.reports for m in r.messages]
