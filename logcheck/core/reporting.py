from __future__ import annotations
from enum import IntEnum
from typing import Tuple

from .models import CheckOutcome

CHECK_NAME = "CheckLogfile"


class Status(IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class Reporter:
    def __init__(self, check_name: str = CHECK_NAME) -> None:
        self.check_name = check_name

    @staticmethod
    def status_for(outcome: CheckOutcome) -> Status:
        if outcome.total_errors > 0 or outcome.failed:
            return Status.CRITICAL
        if outcome.total_warnings > 0 or outcome.stale_detected:
            return Status.WARNING
        return Status.OK

    @staticmethod
    def summary(outcome: CheckOutcome) -> str:
        parts = [f"{outcome.total_warnings} warnings, {outcome.total_errors} errors."]
        parts.extend(outcome.messages)
        return " ".join(parts)

    def render(self, status: Status, message: str) -> str:
        return f"{self.check_name} {status.name}: {message}"

    def report(self, outcome: CheckOutcome) -> Tuple[Status, str]:
        """Return ``(status, line)`` for a finished check."""
        status = self.status_for(outcome)
        return status, self.render(status, self.summary(outcome))
