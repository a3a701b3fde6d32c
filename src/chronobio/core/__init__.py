"""Core algorithms for chronobio."""

from .activity import higher_activity, l5, lower_activity, m10, relative_amplitude
from .epoch import convert_epoch, fill_gaps, find_epoch
from .filtering import filter_by_date_range
from .rhythm import average_day, interdaily_stability, intradaily_variability, normalize_minutes

__all__ = [
    "find_epoch",
    "convert_epoch",
    "fill_gaps",
    "filter_by_date_range",
    "higher_activity",
    "lower_activity",
    "m10",
    "l5",
    "relative_amplitude",
    "average_day",
    "normalize_minutes",
    "intradaily_variability",
    "interdaily_stability",
]
