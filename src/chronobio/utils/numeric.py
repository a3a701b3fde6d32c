"""Numeric helpers shared by the rhythm metrics."""

from __future__ import annotations

import math
from typing import Sequence

EPSILON = 1e-8


def round_half_up(value: float, places: int = 4) -> float:
    """Round ``value`` to ``places`` decimals with halves rounded upwards.

    ``round_half_up(0.00005)`` is ``0.0001`` whereas the built-in
    :func:`round` would return ``0.0`` under banker's rounding.
    """

    shift = 10.0 ** places
    return math.floor(value * shift + 0.5) / shift


def float_equals(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ by less than ``epsilon``."""

    return (a - b) < epsilon and (b - a) < epsilon


def mean(data: Sequence[float]) -> float:
    """Return the arithmetic mean of *data*, or ``0.0`` for empty input."""

    if len(data) == 0:
        return 0.0
    return math.fsum(data) / len(data)
