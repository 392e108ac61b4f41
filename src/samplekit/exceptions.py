"""Exception hierarchy for samplekit.

All errors raised deliberately by the package derive from
:class:`SampleKitError`, so callers can catch the whole family at once.
"""

from __future__ import annotations

from pathlib import Path


class SampleKitError(Exception):
    """Base class for samplekit errors."""


class ConfigurationError(SampleKitError, ValueError):
    """Invalid sampler or run configuration (bins, sample points, ranges)."""


class StateError(SampleKitError, RuntimeError):
    """Operation invoked in the wrong sampler state."""


class DataError(SampleKitError):
    """Problem with an observation data file."""


class DataFileError(DataError):
    """The data file cannot be used at all (missing, unreadable, wrong type)."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = None if path is None else Path(path)


class _RowError(DataError):
    """Error tied to a single row of a data file."""

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = None if path is None else Path(path)
        self.line_number = line_number
        self.line = line


class MalformedRowError(_RowError, ValueError):
    """A row has a missing or non-numeric field."""


class DataDomainError(_RowError, ValueError):
    """A row parses but holds values outside their domain (sigma <= 0, extra fields)."""


__all__ = [
    "SampleKitError",
    "ConfigurationError",
    "StateError",
    "DataError",
    "DataFileError",
    "MalformedRowError",
    "DataDomainError",
]
