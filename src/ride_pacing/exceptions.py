"""Custom exception hierarchy for ride_pacing.

The planning core never raises for well-typed input; these are only raised
where external data enters the package (records, JSON files, CLI arguments).
"""

from __future__ import annotations


class RidePacingError(Exception):
    """Base exception for all ride_pacing errors."""


class RecordFormatError(RidePacingError):
    """A record or JSON document is missing a field or has a bad value."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnknownStrategyError(RecordFormatError):
    """A pacing strategy name did not match any PacingStrategy."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown pacing strategy: {name!r}", field="strategy")
        self.name = name
