from __future__ import annotations


class LogCheckError(Exception):
    """Base class for errors raised by logcheck."""


class ConfigurationError(LogCheckError):
    """Missing or invalid check configuration; no scan is attempted."""
