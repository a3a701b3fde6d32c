"""Common type helpers for chronobio.

This module defines lightweight containers exchanged between the ingestion
layer, the core metrics and the command line.  The structures are
intentionally minimal but add clarity around frequently passed data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Sequence

import numpy as np


@dataclass(frozen=True)
class ActivityWindow:
    """Most or least active window found by the activity scanner."""

    value: float
    onset: datetime

    def __iter__(self) -> Iterator[object]:
        yield self.value
        yield self.onset


@dataclass(frozen=True)
class Window:
    """Index based window used for segmenting sequences."""

    start: int
    end: int

    @property
    def width(self) -> int:
        """Return the number of elements covered by the window."""

        return self.end - self.start


@dataclass
class TimeSeries:
    """Container for paired timestamp and sample sequences."""

    timestamps: Sequence[datetime]
    values: Sequence[float]

    def __post_init__(self) -> None:
        if len(self.timestamps) != len(self.values):
            raise ValueError("timestamps and values must have the same length")
        self.timestamps = list(self.timestamps)
        self.values = np.asarray(self.values, dtype=float)

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def span(self) -> timedelta:
        """Return the time covered between the first and last sample."""

        if not self.timestamps:
            return timedelta(0)
        return self.timestamps[-1] - self.timestamps[0]
