from __future__ import annotations

"""Command line interface for chronobio using Typer."""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import json
import logging

import numpy as np
import typer
from pydantic import ValidationError

from ._typer import bad_parameter, fail
from .config import Settings, load_settings
from .core import (
    average_day,
    convert_epoch,
    fill_gaps,
    filter_by_date_range,
    find_epoch,
    interdaily_stability,
    intradaily_variability,
    l5,
    m10,
    relative_amplitude,
)
from .errors import RhythmError
from .export.results import save_series, save_vector
from .ingest import ActivityParseError, parse_timestamp, read_activity_csv
from .utils.logging import get_logger
from .utils.timeparse import parse_epoch

app = typer.Typer(help="Circadian rhythm descriptors for actigraphy recordings")
logger = logging.getLogger(__name__)

PathArgument = typer.Argument(
    None,
    dir_okay=False,
    help="Activity CSV; defaults to dataset.path from the configuration.",
)
StartOption = typer.Option(None, "--start", help="Ignore samples before this timestamp.")
EndOption = typer.Option(None, "--end", help="Ignore samples after this timestamp.")
OutputOption = typer.Option(None, "--output", "-o", help="Write the result to this file.")


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            pass
    if raw[:1] in {"[", "{"}:
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _apply_overrides(settings: Settings, overrides: List[str]) -> Settings:
    data: Dict[str, Any] = settings.model_dump()
    for override in overrides:
        if "=" not in override:
            raise typer.BadParameter("overrides must be of the form --set section.key=value")
        key, raw_value = override.split("=", 1)
        keys = key.split(".") if key else []
        if len(keys) != 2:
            raise typer.BadParameter(f"unknown configuration key: {key}")
        section, field = keys
        if section not in data or not isinstance(data[section], dict) or field not in data[section]:
            raise typer.BadParameter(f"unknown configuration key: {key}")
        data[section][field] = _parse_override_value(raw_value)
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid configuration override: {exc}") from exc


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. activity.l5_hours=4",
    ),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (RuntimeError, TypeError, ValidationError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        settings = _apply_overrides(settings, set_overrides)

    get_logger("chronobio", settings.logging.level, settings.logging.format)
    ctx.obj = settings


def _timestamp_option(raw: Optional[str], name: str, cfg: Settings) -> Optional[datetime]:
    if raw is None:
        return None
    try:
        return parse_timestamp(raw, cfg.dataset.timestamp_format)
    except ValueError as exc:
        bad_parameter(str(exc), param_hint=name)


def _load(
    cfg: Settings,
    path: Optional[Path],
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Tuple[List[datetime], np.ndarray]:
    if path is None:
        if not cfg.dataset.path:
            bad_parameter("no input file given and dataset.path is unset", param_hint="PATH")
        path = Path(cfg.dataset.path)
    if not path.exists():
        bad_parameter(f"input file not found: {path}", param_hint="PATH")

    try:
        series = read_activity_csv(path, settings=cfg)
    except ActivityParseError as exc:
        bad_parameter(str(exc), param_hint="PATH")
    timestamps, values = series.timestamps, series.values

    lo = _timestamp_option(start, "--start", cfg)
    hi = _timestamp_option(end, "--end", cfg)
    if lo is not None or hi is not None:
        if timestamps:
            lo = lo if lo is not None else timestamps[0]
            hi = hi if hi is not None else timestamps[-1]
        try:
            timestamps, values = filter_by_date_range(timestamps, values, lo, hi)
        except RhythmError as exc:
            fail(exc)
    logger.info("loaded %d samples from %s", len(timestamps), path)
    return list(timestamps), np.asarray(values, dtype=float)


def _fmt(value: float, cfg: Settings) -> str:
    return f"{value:.{cfg.output.precision}f}"


def _emit_vector(vector: np.ndarray, cfg: Settings, output: Optional[Path], label: str) -> None:
    target = output or (Path(cfg.output.save) if cfg.output.save else None)
    if target is not None:
        save_vector(vector, target)
        typer.echo(f"saved {label} vector of {vector.size} values to {target}")
        return
    typer.echo(f"{label} mean: {_fmt(float(vector[0]), cfg)}")
    for minutes, value in enumerate(vector[1:], start=1):
        if value > -1.0:
            typer.echo(f"{minutes:>2} min: {_fmt(float(value), cfg)}")


@app.command()
def epoch(ctx: typer.Context, path: Optional[Path] = PathArgument) -> None:
    """Print the dominant sampling interval of a recording in seconds."""

    cfg: Settings = ctx.obj
    timestamps, _ = _load(cfg, path)
    typer.echo(f"epoch: {find_epoch(timestamps)}s")


@app.command()
def convert(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    to: str = typer.Option(..., "--to", help="Target epoch, e.g. 60, 00:05:00 or 5m."),
    output: Optional[Path] = OutputOption,
    start: Optional[str] = StartOption,
    end: Optional[str] = EndOption,
) -> None:
    """Resample a recording to another epoch."""

    cfg: Settings = ctx.obj
    try:
        new_epoch = parse_epoch(to)
    except ValueError as exc:
        bad_parameter(str(exc), param_hint="--to")
    timestamps, values = _load(cfg, path, start, end)
    try:
        new_ts, new_values = convert_epoch(timestamps, values, new_epoch)
    except RhythmError as exc:
        fail(exc)
    if output:
        save_series(
            new_ts,
            new_values,
            output,
            timestamp_column=cfg.dataset.timestamp_column,
            value_column=cfg.dataset.value_column,
        )
    typer.echo(f"converted {len(timestamps)} samples to {len(new_ts)} samples at {new_epoch}s")


@app.command("fill-gaps")
def fill_gaps_cmd(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    value: float = typer.Option(0.0, "--value", help="Activity assigned to inserted samples."),
    output: Optional[Path] = OutputOption,
) -> None:
    """Insert placeholder samples where epochs are missing."""

    cfg: Settings = ctx.obj
    timestamps, values = _load(cfg, path)
    try:
        new_ts, new_values = fill_gaps(timestamps, values, value)
    except RhythmError as exc:
        fail(exc)
    if output:
        save_series(
            new_ts,
            new_values,
            output,
            timestamp_column=cfg.dataset.timestamp_column,
            value_column=cfg.dataset.value_column,
        )
    typer.echo(f"inserted {len(new_ts) - len(timestamps)} samples")


@app.command()
def activity(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    start: Optional[str] = StartOption,
    end: Optional[str] = EndOption,
) -> None:
    """Print the M10 and L5 windows and their relative amplitude."""

    cfg: Settings = ctx.obj
    timestamps, values = _load(cfg, path, start, end)
    try:
        most = m10(timestamps, values, settings=cfg)
        least = l5(timestamps, values, settings=cfg)
        ra = relative_amplitude(most.value, least.value)
    except RhythmError as exc:
        fail(exc)
    typer.echo(f"M{cfg.activity.m10_hours}: {_fmt(most.value, cfg)} onset {most.onset.isoformat()}")
    typer.echo(f"L{cfg.activity.l5_hours}: {_fmt(least.value, cfg)} onset {least.onset.isoformat()}")
    typer.echo(f"RA: {_fmt(ra, cfg)}")


@app.command()
def iv(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    output: Optional[Path] = OutputOption,
    start: Optional[str] = StartOption,
    end: Optional[str] = EndOption,
) -> None:
    """Compute intradaily variability at 1 to 60 minute resolutions."""

    cfg: Settings = ctx.obj
    timestamps, values = _load(cfg, path, start, end)
    try:
        vector = intradaily_variability(timestamps, values)
    except RhythmError as exc:
        fail(exc)
    _emit_vector(vector, cfg, output, "IV")


@app.command("is")
def is_(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    output: Optional[Path] = OutputOption,
    start: Optional[str] = StartOption,
    end: Optional[str] = EndOption,
) -> None:
    """Compute interdaily stability at the resolutions dividing a day."""

    cfg: Settings = ctx.obj
    timestamps, values = _load(cfg, path, start, end)
    try:
        vector = interdaily_stability(timestamps, values, settings=cfg)
    except RhythmError as exc:
        fail(exc)
    _emit_vector(vector, cfg, output, "IS")


@app.command("average-day")
def average_day_cmd(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    output: Optional[Path] = OutputOption,
    start: Optional[str] = StartOption,
    end: Optional[str] = EndOption,
) -> None:
    """Fold a recording into a single 24 hour profile."""

    cfg: Settings = ctx.obj
    timestamps, values = _load(cfg, path, start, end)
    try:
        day_ts, profile = average_day(timestamps, values, settings=cfg)
    except RhythmError as exc:
        fail(exc)
    if output:
        save_series(
            day_ts,
            profile,
            output,
            timestamp_column=cfg.dataset.timestamp_column,
            value_column=cfg.dataset.value_column,
        )
        typer.echo(f"saved {profile.size} point profile to {output}")
        return
    for stamp, value in zip(day_ts, profile):
        typer.echo(f"{stamp.strftime('%H:%M:%S')} {_fmt(float(value), cfg)}")


@app.command()
def plot(
    ctx: typer.Context,
    path: Optional[Path] = PathArgument,
    metric: str = typer.Option("day", "--metric", help="What to draw: day, iv or is."),
    save: Optional[Path] = typer.Option(None, "--save", help="Write the figure instead of showing it."),
) -> None:
    """Plot the average day or an IV/IS vector with matplotlib."""

    from .viz.profiles import plot_average_day, plot_result_vector, save_or_show

    cfg: Settings = ctx.obj
    metric = metric.lower()
    if metric not in {"day", "iv", "is"}:
        bad_parameter(f"unknown metric {metric!r}; expected day, iv or is", param_hint="--metric")
    timestamps, values = _load(cfg, path)
    try:
        if metric == "day":
            day_ts, profile = average_day(timestamps, values, settings=cfg)
            fig = plot_average_day(day_ts, profile, title=cfg.viz.title)
        elif metric == "iv":
            fig = plot_result_vector(intradaily_variability(timestamps, values), label="IV")
        else:
            fig = plot_result_vector(
                interdaily_stability(timestamps, values, settings=cfg), label="IS"
            )
    except RhythmError as exc:
        fail(exc)
    target = save or (Path(cfg.viz.save) if cfg.viz.save else None)
    save_or_show(fig, target)
    if target:
        typer.echo(f"saved figure to {target}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
