"""Helpers for working with block windows over sequences."""

from __future__ import annotations

from typing import Iterator, List, Sequence, TypeVar

from ..types import Window

T = TypeVar("T")


def iter_windows(data: Sequence[T], size: int, step: int | None = None) -> Iterator[Window]:
    """Yield ``Window`` objects describing slices of *data*.

    ``size`` is the window length and ``step`` controls how far the window
    advances each iteration; it defaults to ``size`` which yields
    non-overlapping blocks.  Trailing elements that cannot fill a whole
    window are not covered.  ``ValueError`` is raised if the arguments are
    not sensible.
    """

    if step is None:
        step = size
    if size <= 0 or step <= 0:
        raise ValueError("size and step must be positive")
    for start in range(0, len(data) - size + 1, step):
        yield Window(start, start + size)


def window_slices(data: Sequence[T], size: int, step: int | None = None) -> List[Sequence[T]]:
    """Return the subsequences for each window."""

    return [data[w.start : w.end] for w in iter_windows(data, size, step)]
