import logging
from datetime import datetime, timedelta

import numpy as np
import pytest

from chronobio.types import ActivityWindow, TimeSeries, Window
from chronobio.utils.logging import get_logger, resolve_level
from chronobio.utils.numeric import float_equals, mean, round_half_up
from chronobio.utils.timeparse import parse_epoch
from chronobio.utils.windows import iter_windows, window_slices


def test_types():
    w = Window(2, 5)
    assert w.width == 3
    value, onset = ActivityWindow(1.5, datetime(2015, 1, 1))
    assert value == 1.5
    assert onset == datetime(2015, 1, 1)
    series = TimeSeries([datetime(2015, 1, 1), datetime(2015, 1, 1, 1)], [1, 2])
    assert len(series) == 2
    assert series.span == timedelta(hours=1)
    assert series.values.dtype == np.float64
    with pytest.raises(ValueError):
        TimeSeries([datetime(2015, 1, 1)], [])


def test_round_half_up():
    assert round_half_up(0.00005) == 0.0001
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(-2.5, 0) == -2.0
    assert round_half_up(78.166666) == 78.1667
    assert round_half_up(1.23444) == 1.2344


def test_float_equals():
    assert float_equals(0.1 + 0.2, 0.3)
    assert not float_equals(0.1, 0.2)
    assert float_equals(1.0, 1.05, epsilon=0.1)


def test_mean():
    assert mean([1.0, 2.0, 3.0]) == 2.0
    assert mean([]) == 0.0


@pytest.mark.parametrize(
    "text, seconds",
    [("60", 60), ("00:05:00", 300), ("02:30", 150), ("30s", 30), ("5m", 300), ("1h", 3600)],
)
def test_parse_epoch(text, seconds):
    assert parse_epoch(text) == seconds


@pytest.mark.parametrize("text", ["", "bad", "0", "1.5", "-60", "1:2:3:4", "xm"])
def test_parse_epoch_rejects(text):
    with pytest.raises(ValueError):
        parse_epoch(text)


def test_windows():
    data = [1, 2, 3, 4, 5, 6, 7]
    assert list(iter_windows(data, 3)) == [Window(0, 3), Window(3, 6)]
    assert list(iter_windows(data, 3, 2)) == [Window(0, 3), Window(2, 5), Window(4, 7)]
    assert window_slices(data, 3) == [[1, 2, 3], [4, 5, 6]]
    assert list(iter_windows(data, 10)) == []
    with pytest.raises(ValueError):
        list(iter_windows(data, 0))


def test_logging():
    logger = get_logger("chronobio.test")
    logger2 = get_logger("chronobio.test", "debug", "%(message)s")
    assert logger is logger2
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].formatter._fmt == "%(message)s"


def test_resolve_level():
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        resolve_level("LOUD")
