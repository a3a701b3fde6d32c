"""Utility modules for ingesting actigraphy recordings."""

from .actigraphy import ActivityParseError, parse_timestamp, read_activity_csv

__all__ = [
    "read_activity_csv",
    "parse_timestamp",
    "ActivityParseError",
]
