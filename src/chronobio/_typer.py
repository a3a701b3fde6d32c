"""Helpers translating library failures into Typer exits."""

from __future__ import annotations

from typing import NoReturn, Optional

import typer

from .errors import RhythmError


def bad_parameter(message: str, *, param_hint: Optional[str] = None) -> NoReturn:
    """Raise :class:`typer.BadParameter`, attaching ``param_hint`` when given."""

    if param_hint is not None:
        raise typer.BadParameter(message, param_hint=param_hint)
    raise typer.BadParameter(message)


def fail(exc: RhythmError) -> NoReturn:
    """Report a failed computation on stderr and exit with status 1.

    The error kind is printed first so scripts can match on it.
    """

    typer.secho(f"error [{exc.kind.value}]: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)
