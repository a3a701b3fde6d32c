"""Multi-resolution rhythm indices.

Intradaily variability (IV) measures how fragmented the rest/activity
pattern is within days; interdaily stability (IS) measures how closely the
days repeat one another.  Both are computed at every resolution from 1 to 60
minutes and returned as a vector of 61 values where index ``m`` holds the
index at ``m``-minute resolution and index 0 holds their mean.

.. math::

   IV_m = \\frac{N \\sum_{i=1}^{N-1} (x_i - x_{i-1})^2}{(N - 1) \\sum_{i=0}^{N-1} (\\bar{x} - x_i)^2}

   IS_m = \\frac{N \\sum_{h=0}^{p-1} (\\bar{x}_h - \\bar{x})^2}{p \\sum_{i=0}^{N-1} (x_i - \\bar{x})^2}

where ``p`` is the number of points of the average day and
:math:`\\bar{x}_h` its values.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Sequence, Tuple

import numpy as np

from ..config import Settings
from ..errors import ErrorKind, RhythmError, require_series
from ..utils.numeric import mean, round_half_up
from ..utils.windows import window_slices
from .epoch import convert_epoch, fill_gaps, find_epoch, seconds_between

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
MINUTES_PER_DAY = 1440
RESOLUTIONS = range(1, 61)
NOT_APPLICABLE = -1.0


def average_day(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    *,
    settings: Settings | None = None,
) -> Tuple[List[datetime], np.ndarray]:
    """Fold a multi-day series into a single 24 hour profile.

    The series is first gap filled with ``settings.epoch.gap_sentinel`` so
    that every sample sits on the epoch grid.  Sample ``i`` then contributes
    to bucket ``i % points_per_day``; filled samples contribute nothing.

    Returns
    -------
    tuple
        The timestamps of the first day of the gap-filled series and the
        bucket means rounded to 4 decimals.

    Raises
    ------
    RhythmError
        ``EMPTY_BUCKET`` when a time of day never holds a recorded sample.
    """

    if settings is None:
        settings = Settings()

    require_series(timestamps, values)
    epoch = find_epoch(timestamps)
    if epoch == 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, "could not detect the epoch of the series")
    if seconds_between(timestamps[0], timestamps[-1]) < SECONDS_PER_DAY:
        raise RhythmError(ErrorKind.LESS_THAN_1_DAY)
    points = SECONDS_PER_DAY // epoch
    if points == 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, f"a {epoch}s epoch is longer than a day")

    sentinel = settings.epoch.gap_sentinel
    filled_ts, filled = fill_gaps(timestamps, values, sentinel)

    real = filled != sentinel
    positions = np.arange(filled.size) % points
    sums = np.zeros(points, dtype=float)
    counts = np.zeros(points, dtype=int)
    np.add.at(sums, positions[real], filled[real])
    np.add.at(counts, positions[real], 1)

    empty = np.flatnonzero(counts == 0)
    if empty.size:
        raise RhythmError(
            ErrorKind.EMPTY_BUCKET,
            f"no recorded sample for time-of-day bucket {int(empty[0])} of {points}",
        )

    profile = np.array([round_half_up(s / c, 4) for s, c in zip(sums, counts)], dtype=float)
    return filled_ts[:points], profile


def normalize_minutes(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    minutes: int,
) -> Tuple[List[datetime], np.ndarray]:
    """Average consecutive blocks of ``minutes`` samples of a 1-minute series.

    Blocks start at the first sample and never overlap; each is stamped with
    the timestamp of its first sample.  A trailing partial block is dropped.
    """

    require_series(timestamps, values)
    if minutes <= 0:
        raise RhythmError(ErrorKind.MINUTES_INVALID, f"block length must be positive, got {minutes}")

    blocks = window_slices(np.asarray(values, dtype=float), minutes)
    out_ts = [timestamps[i * minutes] for i in range(len(blocks))]
    return out_ts, np.asarray([mean(block) for block in blocks], dtype=float)


def _iv(data: np.ndarray) -> float:
    n = data.size
    if n == 0:
        return 0.0
    avg = mean(data)
    numerator = n * float(np.sum(np.diff(data) ** 2))
    denominator = (n - 1) * float(np.sum((avg - data) ** 2))
    if denominator == 0:
        return 0.0
    return round_half_up(numerator / denominator, 4)


def intradaily_variability(timestamps: Sequence[datetime], values: Sequence[float]) -> np.ndarray:
    """Return the IV vector of a series spanning at least two hours.

    Each resolution ``m`` resamples the series to ``60 * m`` seconds with
    :func:`~chronobio.core.epoch.convert_epoch`; a failed conversion aborts
    the computation.  Resolutions whose resampled series is empty, or has no
    variance, score ``0.0``.  Index 0 is the plain mean of indices 1..60.
    """

    require_series(timestamps, values)
    if seconds_between(timestamps[0], timestamps[-1]) < 2 * 3600:
        raise RhythmError(ErrorKind.LESS_THAN_2_HOURS)

    iv = np.zeros(len(RESOLUTIONS) + 1, dtype=float)
    for m in RESOLUTIONS:
        _, data = convert_epoch(timestamps, values, 60 * m)
        iv[m] = _iv(data)
    iv[0] = float(np.mean(iv[1:]))
    logger.debug("intradaily variability mean %.4f", iv[0])
    return iv


def _is(data: np.ndarray, profile: np.ndarray) -> float:
    avg = mean(data)
    numerator = data.size * float(np.sum((profile - avg) ** 2))
    denominator = profile.size * float(np.sum((data - avg) ** 2))
    if denominator == 0:
        return NOT_APPLICABLE
    return numerator / denominator


def interdaily_stability(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    *,
    settings: Settings | None = None,
) -> np.ndarray:
    """Return the IS vector of a series spanning at least two days.

    The series is resampled to a 1-minute epoch and cut to whole days.  Only
    resolutions dividing 1440 minutes are computed; the others, and
    resolutions without variance, hold ``-1.0``.  Index 0 is the mean of the
    computed entries.

    ``LESS_THAN_2_DAYS`` is raised when the span, or the number of minute
    samples left after resampling, falls short of two days.  A hole covering
    the same time of day on every day surfaces as ``EMPTY_BUCKET``.
    """

    if settings is None:
        settings = Settings()

    require_series(timestamps, values)
    if seconds_between(timestamps[0], timestamps[-1]) < 2 * SECONDS_PER_DAY:
        raise RhythmError(ErrorKind.LESS_THAN_2_DAYS)
    if find_epoch(timestamps) == 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, "could not detect the epoch of the series")

    minute_ts, minute_values = convert_epoch(timestamps, values, 60)
    usable = minute_values.size - minute_values.size % MINUTES_PER_DAY
    if usable < 2 * MINUTES_PER_DAY:
        raise RhythmError(
            ErrorKind.LESS_THAN_2_DAYS,
            f"only {minute_values.size} minutes recorded, two whole days are required",
        )
    minute_ts, minute_values = minute_ts[:usable], minute_values[:usable]
    logger.debug("interdaily stability over %d days", usable // MINUTES_PER_DAY)

    result = np.full(len(RESOLUTIONS) + 1, NOT_APPLICABLE, dtype=float)
    for m in RESOLUTIONS:
        if MINUTES_PER_DAY % m:
            continue
        block_ts, block_values = normalize_minutes(minute_ts, minute_values, m)
        _, profile = average_day(block_ts, block_values, settings=settings)
        result[m] = _is(block_values, profile)

    valid = result[1:][result[1:] > NOT_APPLICABLE]
    result[0] = float(np.mean(valid)) if valid.size else NOT_APPLICABLE
    return result
