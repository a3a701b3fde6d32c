"""Logging setup shared by the command line and the library modules."""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
_OWNED = "_chronobio_owned"


def resolve_level(level: int | str) -> int:
    """Return the numeric value of ``level``, accepting names in any case."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown logging level: {level!r}")
    return resolved


def get_logger(name: str = "chronobio", level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Return the named logger with exactly one chronobio stream handler.

    The handler is created on the first call and reused afterwards; every
    call re-applies ``level`` and ``fmt`` so the most recently loaded
    configuration wins.
    """

    logger = logging.getLogger(name)
    handler = next((h for h in logger.handlers if getattr(h, _OWNED, False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt))
    logger.setLevel(resolve_level(level))
    return logger
