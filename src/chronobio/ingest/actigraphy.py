# src/chronobio/ingest/actigraphy.py
"""Reader for actigraphy exports.

Supports:
A) CSV with header, column names taken from ``Settings.dataset``:
   timestamp,activity

B) Headerless two-column lines:
   <timestamp>,<value>
   <timestamp> <value>     (when the timestamp has no spaces)

Blank lines and lines starting with ``#`` are ignored.  Timestamps must not
go backwards.
"""

from __future__ import annotations

import csv
import logging
import pathlib
import re
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple, Union

from ..config import Settings
from ..types import TimeSeries

logger = logging.getLogger(__name__)

# Timestamp grammar (ISO / ISO with space / DD/MM/YYYY / float epoch)
TIMESTAMP_RE = re.compile(
    r"""^\s*(?:
            (?P<iso>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:\d{2})?)
          | (?P<iso_space>\d{4}-\d{2}-\d{2}\s\d{2}:\d{2}(?::\d{2})?)
          | (?P<dmy>\d{2}/\d{2}/\d{4}\s\d{2}:\d{2}(?::\d{2})?)
          | (?P<float>\d+(?:\.\d+)?)
        )\s*$""",
    re.VERBOSE,
)


def _naive_utc(stamp: datetime) -> datetime:
    if stamp.tzinfo is None:
        return stamp
    return stamp.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(token: str, fmt: Optional[str] = None) -> datetime:
    """Parse ``token`` into a naive :class:`datetime`.

    ``fmt`` forces :meth:`datetime.strptime` with that format.  Otherwise ISO
    8601, ``YYYY-MM-DD HH:MM[:SS]``, ``DD/MM/YYYY HH:MM[:SS]`` and floating
    point Unix seconds are recognised.  Stamps carrying an offset, and Unix
    seconds, are converted to UTC and returned without ``tzinfo`` so every
    parsed stamp compares with every other one.
    """

    if fmt:
        return _naive_utc(datetime.strptime(token.strip(), fmt))

    m = TIMESTAMP_RE.match(token)
    if not m:
        raise ValueError(f"Unrecognised timestamp: {token!r}")

    if m.group("iso"):
        return _naive_utc(datetime.fromisoformat(m.group("iso").replace("Z", "+00:00")))
    if m.group("iso_space"):
        text = m.group("iso_space")
        fmt = "%Y-%m-%d %H:%M:%S" if text.count(":") == 2 else "%Y-%m-%d %H:%M"
        return datetime.strptime(text, fmt)
    if m.group("dmy"):
        text = m.group("dmy")
        fmt = "%d/%m/%Y %H:%M:%S" if text.count(":") == 2 else "%d/%m/%Y %H:%M"
        return datetime.strptime(text, fmt)
    if m.group("float"):
        return _naive_utc(datetime.fromtimestamp(float(m.group("float")), tz=timezone.utc))

    raise ValueError(f"Unsupported timestamp: {token!r}")


class ActivityParseError(ValueError):
    """Raised when an actigraphy file cannot be parsed."""

    def __init__(self, message: str, *, path: Union[str, pathlib.Path], line: int):
        self.path = str(path)
        self.line = line
        super().__init__(f"{self.path}:{self.line}: {message}")


def _parse_value(raw: str) -> float:
    raw = raw.strip()
    if not raw:
        raise ValueError("Missing activity value")
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid activity value {raw!r}") from None


def _split_line(line: str, delimiter: str) -> Tuple[str, str]:
    if delimiter in line:
        parts = [p.strip() for p in line.split(delimiter)]
    else:
        parts = [t for t in re.split(r"\s+", line.strip()) if t]
    if len(parts) < 2:
        raise ValueError(f"Unrecognised activity line: {line!r}")
    return parts[0], parts[1]


def _iter_headered(
    lines: List[str],
    *,
    offset: int,
    path: pathlib.Path,
    ts_col: str,
    value_col: str,
    delimiter: str,
    fmt: Optional[str],
) -> Iterator[Tuple[int, datetime, float]]:
    reader = csv.DictReader(lines, delimiter=delimiter)
    fields = [f.strip().lstrip("\ufeff") for f in (reader.fieldnames or [])]
    reader.fieldnames = fields
    missing = [c for c in (ts_col, value_col) if c not in fields]
    if missing:
        raise ActivityParseError(f"CSV header lacks column(s) {missing}", path=path, line=offset + 1)
    for row in reader:
        lineno = offset + reader.line_num
        ts_raw = (row.get(ts_col) or "").strip()
        if not ts_raw or ts_raw.startswith("#"):
            continue
        try:
            yield lineno, parse_timestamp(ts_raw, fmt), _parse_value(row.get(value_col) or "")
        except ValueError as exc:
            raise ActivityParseError(str(exc), path=path, line=lineno) from exc


def _iter_plain(
    lines: List[str], *, path: pathlib.Path, delimiter: str, fmt: Optional[str]
) -> Iterator[Tuple[int, datetime, float]]:
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            ts_raw, value_raw = _split_line(line, delimiter)
            yield lineno, parse_timestamp(ts_raw, fmt), _parse_value(value_raw)
        except ValueError as exc:
            raise ActivityParseError(str(exc), path=path, line=lineno) from exc


def read_activity_csv(
    path: Union[str, pathlib.Path],
    *,
    settings: Settings | None = None,
) -> TimeSeries:
    """Load a timestamped activity series from ``path``.

    Column names, delimiter and an optional explicit timestamp format are
    taken from ``settings.dataset``.  A file whose first meaningful line
    names the timestamp column is read as a headered CSV, anything else as
    plain ``timestamp,value`` lines.
    """

    if settings is None:
        settings = Settings()
    ds = settings.dataset
    p = pathlib.Path(path)
    lines = p.read_text(encoding="utf8").splitlines()

    first = next(
        (i for i, line in enumerate(lines) if line.strip() and not line.lstrip().startswith("#")),
        None,
    )
    if first is None:
        rows: Iterator[Tuple[int, datetime, float]] = iter(())
    else:
        header = [c.strip().lstrip("\ufeff") for c in lines[first].split(ds.delimiter)]
        if ds.timestamp_column in header:
            rows = _iter_headered(
                lines[first:],
                offset=first,
                path=p,
                ts_col=ds.timestamp_column,
                value_col=ds.value_column,
                delimiter=ds.delimiter,
                fmt=ds.timestamp_format,
            )
        else:
            rows = _iter_plain(lines, path=p, delimiter=ds.delimiter, fmt=ds.timestamp_format)

    timestamps: List[datetime] = []
    values: List[float] = []
    for lineno, stamp, value in rows:
        if timestamps and stamp < timestamps[-1]:
            raise ActivityParseError(
                f"timestamp {stamp.isoformat()} precedes {timestamps[-1].isoformat()}",
                path=p,
                line=lineno,
            )
        timestamps.append(stamp)
        values.append(value)

    logger.debug("read %d samples from %s", len(timestamps), p)
    return TimeSeries(timestamps, values)
