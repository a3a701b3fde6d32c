"""Selection of samples by time range."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence, Tuple

import numpy as np

from ..errors import ErrorKind, RhythmError, require_series


def filter_by_date_range(
    timestamps: Sequence[datetime],
    values: Sequence[float],
    start: datetime,
    end: datetime,
) -> Tuple[List[datetime], np.ndarray]:
    """Return the samples whose timestamp lies within ``[start, end]``.

    Both bounds are inclusive and the order of the samples is preserved.
    ``INVALID_TIME_RANGE`` is raised when ``end`` precedes ``start``.
    """

    require_series(timestamps, values)
    if end < start:
        raise RhythmError(ErrorKind.INVALID_TIME_RANGE, f"{end} is before {start}")

    data = np.asarray(values, dtype=float)
    keep = [i for i, stamp in enumerate(timestamps) if start <= stamp <= end]
    return [timestamps[i] for i in keep], data[keep]
