from __future__ import annotations
from typing import Tuple


class SeverityMatcher:
    """
    Base class for severity matchers. Subclasses set NAME and override
    ``matches``. The tokens live up top so a subclass can look for other
    keywords without touching the scanner.
    """
    NAME: str = "base"
    WARNING_TOKEN: str = "WARNING"
    ERROR_TOKEN: str = "ERROR"

    def matches(self, line: str, token: str) -> bool:
        raise NotImplementedError

    def classify(self, line: str) -> Tuple[bool, bool]:
        """Return ``(is_warning, is_error)``; both may be true for one line."""
        return self.matches(line, self.WARNING_TOKEN), self.matches(line, self.ERROR_TOKEN)
