from datetime import datetime, timedelta

import matplotlib

matplotlib.use("Agg")

import pytest

HOURLY_ACTIVITY = [450.0, 50.0, 25.0, 20.0, 100.0, 500.0, 250.0, 990.0, 130.0, 540.0, 40.0, 50.0]


def make_timestamps(start, epoch_s, n):
    return [start + timedelta(seconds=epoch_s * i) for i in range(n)]


@pytest.fixture
def hourly_series():
    """Twelve hourly samples stamped 01:00 to 12:00 on 2015-01-01."""
    ts = make_timestamps(datetime(2015, 1, 1, 1), 3600, 12)
    return ts, list(HOURLY_ACTIVITY)


@pytest.fixture
def step_series():
    """240 minute samples in step blocks of 100/150/225/250/300."""
    values = [100.0] * 50 + [150.0] * 50 + [225.0] * 50 + [250.0] * 50 + [300.0] * 40
    ts = make_timestamps(datetime(2015, 1, 1), 60, len(values))
    return ts, values


@pytest.fixture
def three_day_hourly():
    """Three days of hourly samples at 45.5, 102.5 and 86.5."""
    values = [45.5] * 24 + [102.5] * 24 + [86.5] * 24
    ts = make_timestamps(datetime(2015, 1, 1), 3600, len(values))
    return ts, values


@pytest.fixture
def repeating_days():
    """Three identical days of minute samples, active from 08:00 to 20:00."""
    day = [100.0 if 480 <= minute < 1200 else 10.0 for minute in range(1440)]
    values = day * 3
    ts = make_timestamps(datetime(2015, 1, 1), 60, len(values))
    return ts, values
