from __future__ import annotations


def is_stale(last_modified: float, now: float, max_age: float) -> bool:
    """True when the file has not been modified within ``max_age`` seconds of ``now``."""
    return last_modified <= now - max_age
