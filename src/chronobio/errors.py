"""Error kinds shared by every chronobio operation.

All validation failures raise :class:`RhythmError`.  Callers branch on the
``kind`` attribute rather than on the message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class ErrorKind(str, Enum):
    """Closed set of validation failures."""

    EMPTY = "Empty"
    DIFFERENT_SIZE = "DifferentSize"
    INVALID_HOURS = "InvalidHours"
    INVALID_EPOCH = "InvalidEpoch"
    MINUTES_INVALID = "MinutesInvalid"
    HOURS_HIGHER = "HoursHigher"
    LESS_THAN_1_DAY = "LessThan1Day"
    LESS_THAN_2_HOURS = "LessThan2Hours"
    LESS_THAN_2_DAYS = "LessThan2Days"
    INVALID_TIME_RANGE = "InvalidTimeRange"
    NULL_VALUES = "NullValues"
    EMPTY_BUCKET = "EmptyBucket"


class RhythmError(ValueError):
    """Raised when the inputs of an operation fail validation."""

    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = ErrorKind(kind)
        super().__init__(f"{self.kind.value}: {message}" if message else self.kind.value)


def require_series(timestamps: Sequence, values: Sequence) -> None:
    """Check the shared preconditions of every series operation.

    ``EMPTY`` is raised when either sequence has no elements and
    ``DIFFERENT_SIZE`` when their lengths differ.
    """

    if len(timestamps) == 0 or len(values) == 0:
        raise RhythmError(ErrorKind.EMPTY)
    if len(timestamps) != len(values):
        raise RhythmError(
            ErrorKind.DIFFERENT_SIZE,
            f"{len(timestamps)} timestamps for {len(values)} values",
        )


__all__ = ["ErrorKind", "RhythmError", "require_series"]
