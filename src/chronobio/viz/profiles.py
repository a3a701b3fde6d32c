"""Plots of average-day profiles and multi-resolution result vectors."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter, MultipleLocator

# rcParams shared by every chronobio figure
PROFILE_STYLE = {
    "figure.figsize": (10, 4),
    "axes.grid": True,
    "grid.linestyle": ":",
    "grid.alpha": 0.6,
    "axes.titlesize": "large",
    "lines.linewidth": 1.5,
}


def _axes(ax: plt.Axes | None, style: dict | None) -> tuple[plt.Figure, plt.Axes]:
    rc = dict(PROFILE_STYLE)
    if style:
        rc.update(style)
    with plt.rc_context(rc):
        if ax is None:
            fig, ax = plt.subplots()
        else:
            fig = ax.figure
        ax.grid(True, linestyle=rc["grid.linestyle"], alpha=rc["grid.alpha"])
    return fig, ax


def save_or_show(fig: plt.Figure, save: str | Path | None = None, show: bool = False) -> None:
    """Save ``fig`` to ``save`` or display it interactively.

    Without ``save`` the figure is always shown.
    """
    if save:
        fig.savefig(save, bbox_inches="tight")
    if show or not save:
        plt.show()


def hours_of_day(timestamps: Sequence[datetime]) -> np.ndarray:
    """Express ``timestamps`` as hours since midnight of the first sample.

    Values keep increasing past 24 so a profile starting mid-day is drawn
    as one continuous line.
    """

    start = timestamps[0]
    offset = start.hour + start.minute / 60.0 + start.second / 3600.0
    return np.array([(t - start).total_seconds() / 3600.0 + offset for t in timestamps])


def plot_average_day(
    timestamps: Sequence[datetime],
    profile: Sequence[float],
    *,
    title: str = "Average day",
    ax: plt.Axes | None = None,
    style: dict | None = None,
) -> plt.Figure:
    """Plot an average-day profile as a step line against clock time."""

    fig, ax = _axes(ax, style)
    ax.step(hours_of_day(timestamps), profile, where="post")
    ax.xaxis.set_major_locator(MultipleLocator(3))
    ax.xaxis.set_major_formatter(FuncFormatter(lambda x, _: f"{int(x) % 24:02d}:00"))
    ax.set_title(title)
    ax.set_xlabel("Time of day")
    ax.set_ylabel("Mean activity")
    return fig


def plot_result_vector(
    vector: Sequence[float],
    *,
    label: str,
    ax: plt.Axes | None = None,
    style: dict | None = None,
) -> plt.Figure:
    """Plot an IV or IS vector by resolution, skipping ``-1.0`` entries.

    The index-0 mean is drawn as a horizontal reference line.
    """

    fig, ax = _axes(ax, style)
    arr = np.asarray(vector, dtype=float)
    minutes = np.arange(1, arr.size)
    values = arr[1:]
    valid = values > -1.0
    ax.plot(minutes[valid], values[valid], marker="o", label=label)
    ax.axhline(arr[0], linestyle="--", color="grey", label=f"mean {label}")
    ax.set_xlabel("Resolution (minutes)")
    ax.set_ylabel(label)
    ax.legend()
    return fig
