"""Circadian rhythm descriptors for actigraphy time series."""

from .core import (
    average_day,
    convert_epoch,
    fill_gaps,
    filter_by_date_range,
    find_epoch,
    higher_activity,
    interdaily_stability,
    intradaily_variability,
    l5,
    lower_activity,
    m10,
    normalize_minutes,
    relative_amplitude,
)
from .errors import ErrorKind, RhythmError
from .types import ActivityWindow, TimeSeries

__version__ = "0.1.0"

__all__ = [
    "ActivityWindow",
    "ErrorKind",
    "RhythmError",
    "TimeSeries",
    "average_day",
    "convert_epoch",
    "fill_gaps",
    "filter_by_date_range",
    "find_epoch",
    "higher_activity",
    "interdaily_stability",
    "intradaily_variability",
    "l5",
    "lower_activity",
    "m10",
    "normalize_minutes",
    "relative_amplitude",
]
