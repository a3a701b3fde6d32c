"""Most and least active windows of an activity series.

``M10`` is the ten-hour window with the highest mean activity and ``L5`` the
five-hour window with the lowest.  Both are specialisations of a single scan
over every window start, see :func:`higher_activity` and
:func:`lower_activity`.  :func:`relative_amplitude` contrasts the two.
"""

from __future__ import annotations

import logging
import operator
from datetime import datetime, timedelta
from typing import Callable, Sequence

import numpy as np

from ..config import Settings
from ..errors import ErrorKind, RhythmError, require_series
from ..types import ActivityWindow
from ..utils.numeric import round_half_up

logger = logging.getLogger(__name__)


def _scan(
    hours: float,
    timestamps: Sequence[datetime],
    values: Sequence[float],
    better: Callable[[float, float], bool],
) -> ActivityWindow:
    if hours <= 0:
        raise RhythmError(ErrorKind.INVALID_HOURS, f"window length must be positive, got {hours}")
    require_series(timestamps, values)

    duration = timedelta(hours=hours)
    last = timestamps[-1]
    if timestamps[0] + duration > last:
        raise RhythmError(ErrorKind.HOURS_HIGHER, f"a {hours}h window exceeds the series span")

    data = np.asarray(values, dtype=float)
    n = len(timestamps)
    best_value = 0.0
    best_onset = timestamps[0]
    seeded = False

    for start in range(n):
        onset = timestamps[start]
        end = onset + duration
        if end > last:
            break

        total = 0.0
        count = 0
        j = start
        stamp = onset
        while stamp < end:
            total += data[j]
            count += 1
            j += 1
            if j >= n:
                break
            stamp = timestamps[j]

        current = total / count
        if not seeded or better(current, best_value):
            best_value = current
            best_onset = onset
            seeded = True

    return ActivityWindow(round_half_up(best_value, 4), best_onset)


def higher_activity(hours: float, timestamps: Sequence[datetime], values: Sequence[float]) -> ActivityWindow:
    """Return the window of ``hours`` length with the highest mean activity.

    Every sample can start a window as long as the window end does not pass
    the last timestamp.  The window mean covers the samples stamped before
    ``onset + hours``.  On ties the earliest onset is kept.
    """

    return _scan(hours, timestamps, values, operator.gt)


def lower_activity(hours: float, timestamps: Sequence[datetime], values: Sequence[float]) -> ActivityWindow:
    """Return the window of ``hours`` length with the lowest mean activity."""

    return _scan(hours, timestamps, values, operator.lt)


def m10(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    *,
    settings: Settings | None = None,
) -> ActivityWindow:
    """Most active ten-hour window."""

    if settings is None:
        settings = Settings()
    return higher_activity(settings.activity.m10_hours, timestamps, values)


def l5(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    *,
    settings: Settings | None = None,
) -> ActivityWindow:
    """Least active five-hour window."""

    if settings is None:
        settings = Settings()
    return lower_activity(settings.activity.l5_hours, timestamps, values)


def relative_amplitude(highest: float, lowest: float) -> float:
    """Return ``(highest - lowest) / (highest + lowest)`` rounded to 4 decimals.

    ``NULL_VALUES`` is raised when both averages are exactly zero, or when
    they cancel out and the ratio is undefined.
    """

    if highest + lowest == 0.0:
        message = (
            "both averages are zero"
            if highest == 0.0
            else f"averages {highest} and {lowest} sum to zero"
        )
        raise RhythmError(ErrorKind.NULL_VALUES, message)
    ra = round_half_up((highest - lowest) / (highest + lowest), 4)
    logger.debug("relative amplitude of %s and %s: %s", highest, lowest, ra)
    return ra
