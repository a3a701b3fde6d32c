"""Utilities for parsing human friendly epoch lengths."""

from __future__ import annotations


def parse_epoch(text: str) -> int:
    """Parse ``text`` as an epoch length in whole seconds.

    Accepted formats are:

    * ``HH:MM:SS``
    * ``MM:SS``
    * ``SS``
    * ``<n>s``, ``<n>m`` or ``<n>h``

    ``ValueError`` is raised on malformed input or when the result is not a
    positive whole number of seconds.
    """

    text = text.strip().lower()
    if not text:
        raise ValueError("empty epoch string")

    units = {"s": 1, "m": 60, "h": 3600}
    if text[-1] in units:
        try:
            seconds = float(text[:-1]) * units[text[-1]]
        except ValueError as exc:
            raise ValueError(f"invalid epoch value: {text!r}") from exc
    else:
        try:
            parts = [float(p) for p in text.split(":")]
        except ValueError as exc:
            raise ValueError(f"invalid epoch value: {text!r}") from exc
        if len(parts) > 3:
            raise ValueError("too many components in epoch string")
        seconds = 0.0
        for part in parts:
            seconds = seconds * 60 + part

    if seconds <= 0 or seconds != int(seconds):
        raise ValueError(f"epoch must be a positive whole number of seconds: {text!r}")
    return int(seconds)
