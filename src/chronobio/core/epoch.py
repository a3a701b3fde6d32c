"""Epoch detection and resampling of activity series.

The *epoch* of a series is its dominant sampling interval in whole seconds.
It is always derived from the data itself.  :func:`convert_epoch` resamples a
series to another epoch and :func:`fill_gaps` restores a fixed cadence by
inserting placeholder samples where recordings are missing.

Resampled series are anchored on the phase of the raw series: the first
output timestamp is ``first_timestamp - current_epoch + new_epoch``, so the
output grid never depends on midnight or any other external reference.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

import numpy as np

from ..errors import ErrorKind, RhythmError, require_series
from ..utils.numeric import round_half_up

logger = logging.getLogger(__name__)

Series = Tuple[List[datetime], np.ndarray]


def seconds_between(earlier: datetime, later: datetime) -> int:
    """Return the whole seconds from ``earlier`` to ``later``.

    Equal or out-of-order timestamps give ``0``.
    """

    if later <= earlier:
        return 0
    return int((later - earlier).total_seconds())


def find_epoch(timestamps: Sequence[datetime]) -> int:
    """Return the most frequent interval between consecutive timestamps.

    On a tie the interval encountered first wins.  ``0`` is returned when
    fewer than two timestamps are given.
    """

    if len(timestamps) < 2:
        return 0
    counts = Counter(
        seconds_between(a, b) for a, b in zip(timestamps[:-1], timestamps[1:])
    )
    return max(counts, key=counts.__getitem__)


def _decrease(timestamps: Sequence[datetime], data: np.ndarray, current: int, new: int) -> Series:
    step = timedelta(seconds=new)
    repeat = current // new
    stamp = timestamps[0] - timedelta(seconds=current)
    out_ts: List[datetime] = []
    for _ in range(len(data) * repeat):
        stamp += step
        out_ts.append(stamp)
    return out_ts, np.repeat(data, repeat)


def _increase(timestamps: Sequence[datetime], data: np.ndarray, current: int, new: int) -> Series:
    step = timedelta(seconds=new)
    ratio = new / current
    stamp = timestamps[0] - timedelta(seconds=current)
    out_ts: List[datetime] = []
    out_values: List[float] = []
    elapsed = 0
    total = 0.0
    for value in data:
        elapsed += current
        total += value
        if elapsed >= new:
            stamp += step
            out_ts.append(stamp)
            out_values.append(round_half_up(total / ratio, 4))
            elapsed = 0
            total = 0.0
    return out_ts, np.asarray(out_values, dtype=float)


def convert_epoch(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    new_epoch: int,
) -> Series:
    """Resample a series to ``new_epoch`` seconds.

    Parameters
    ----------
    timestamps:
        Non-decreasing sample times.
    values:
        Samples aligned with ``timestamps``.
    new_epoch:
        Target interval in seconds.

    Returns
    -------
    tuple
        ``(timestamps, values)`` as a new list and a new
        :class:`numpy.ndarray`.

    Notes
    -----
    When ``new_epoch`` is a multiple of the current epoch consecutive samples
    are averaged into groups (rounded to 4 decimals, a trailing partial group
    is dropped).  When it divides the current epoch each sample is repeated.
    Any other ratio first expands the series to a 1-second epoch and then
    averages it up to ``new_epoch``.
    """

    require_series(timestamps, values)
    if new_epoch <= 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, f"target epoch must be positive, got {new_epoch}")

    current = find_epoch(timestamps)
    if current == 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, "could not detect the epoch of the series")

    data = np.asarray(values, dtype=float)
    if new_epoch == current:
        return list(timestamps), data.copy()

    if new_epoch > current and new_epoch % current == 0:
        logger.debug("increasing epoch %ss -> %ss", current, new_epoch)
        return _increase(timestamps, data, current, new_epoch)
    if current > new_epoch and current % new_epoch == 0:
        logger.debug("decreasing epoch %ss -> %ss", current, new_epoch)
        return _decrease(timestamps, data, current, new_epoch)

    logger.debug("converting epoch %ss -> %ss through 1s", current, new_epoch)
    fine_ts, fine_values = _decrease(timestamps, data, current, 1)
    return _increase(fine_ts, fine_values, 1, new_epoch)


def fill_gaps(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    fill_value: float,
) -> Series:
    """Insert ``fill_value`` samples wherever the series skips epochs.

    A gap of at least twice the detected epoch between two samples receives
    ``gap // epoch - 1`` synthetic samples at epoch spacing.  Real samples are
    copied unchanged, so running the function on its own output is a no-op.
    """

    require_series(timestamps, values)
    epoch = find_epoch(timestamps)
    if epoch == 0:
        raise RhythmError(ErrorKind.INVALID_EPOCH, "could not detect the epoch of the series")

    step = timedelta(seconds=epoch)
    out_ts: List[datetime] = [timestamps[0]]
    out_values: List[float] = [float(values[0])]
    inserted = 0
    for i in range(1, len(timestamps)):
        gap = seconds_between(timestamps[i - 1], timestamps[i])
        if gap >= 2 * epoch:
            stamp = timestamps[i - 1]
            for _ in range(gap // epoch - 1):
                stamp += step
                out_ts.append(stamp)
                out_values.append(fill_value)
                inserted += 1
        out_ts.append(timestamps[i])
        out_values.append(float(values[i]))

    if inserted:
        logger.debug("filled %d missing samples at %ss epoch", inserted, epoch)
    return out_ts, np.asarray(out_values, dtype=float)
