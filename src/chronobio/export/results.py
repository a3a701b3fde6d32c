from __future__ import annotations

"""Persistence helpers for result vectors and resampled series."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Sequence

import numpy as np


def save_vector(values: Sequence[float] | np.ndarray, path: str | Path) -> Path:
    """Write a one dimensional result vector to ``path``.

    The format follows the suffix: ``.npy`` uses :func:`numpy.save`,
    ``.json`` writes a list of numbers and anything else is written as one
    value per line.
    """

    arr = np.asarray(values, dtype=float).reshape(-1)
    p = Path(path)
    if p.suffix == ".npy":
        np.save(p, arr)
    elif p.suffix == ".json":
        p.write_text(json.dumps(arr.tolist()))
    else:
        np.savetxt(p, arr, delimiter=",")
    return p


def load_vector(path: str | Path) -> np.ndarray:
    """Load a vector previously saved via :func:`save_vector`."""

    p = Path(path)
    if p.suffix == ".npy":
        return np.load(p)
    if p.suffix == ".json":
        return np.asarray(json.loads(p.read_text()), dtype=float)
    return np.atleast_1d(np.loadtxt(p, delimiter=","))


def save_series(
    timestamps: Sequence[datetime],
    values: Sequence[float] | np.ndarray,
    path: str | Path,
    *,
    timestamp_column: str = "timestamp",
    value_column: str = "activity",
) -> Path:
    """Write a timestamped series as a headered CSV readable by the ingester."""

    if len(timestamps) != len(values):
        raise ValueError("timestamps and values must contain the same number of samples")

    p = Path(path)
    with open(p, "w", encoding="utf8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow([timestamp_column, value_column])
        for stamp, value in zip(timestamps, values):
            writer.writerow([stamp.isoformat(), repr(float(value))])
    return p
