from datetime import datetime

import pytest

from chronobio.config import Settings
from chronobio.ingest import ActivityParseError, parse_timestamp, read_activity_csv


def test_headered_csv(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("timestamp,activity\n2015-01-01T00:00:00,1.5\n2015-01-01T00:01:00,2\n")
    series = read_activity_csv(p)
    assert series.timestamps == [datetime(2015, 1, 1), datetime(2015, 1, 1, 0, 1)]
    assert series.values.tolist() == [1.5, 2.0]


def test_headerless_lines_with_comments(tmp_path):
    p = tmp_path / "act.txt"
    p.write_text(
        "# exported by device 42\n"
        "\n"
        "2015-01-01 00:00:00,10\n"
        "2015-01-01 00:01,20\n"
    )
    series = read_activity_csv(p)
    assert len(series) == 2
    assert series.timestamps[1] == datetime(2015, 1, 1, 0, 1)
    assert series.values.tolist() == [10.0, 20.0]


def test_whitespace_separated_lines(tmp_path):
    p = tmp_path / "act.txt"
    p.write_text("2015-01-01T00:00:00 5\n2015-01-01T00:00:30   6\n")
    series = read_activity_csv(p)
    assert series.values.tolist() == [5.0, 6.0]


def test_custom_columns(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("\ufefftime;steps;counts\n2015-01-01T00:00:00;1;4\n2015-01-01T00:01:00;1;8\n")
    settings = Settings()
    settings.dataset.timestamp_column = "time"
    settings.dataset.value_column = "counts"
    settings.dataset.delimiter = ";"
    series = read_activity_csv(p, settings=settings)
    assert series.values.tolist() == [4.0, 8.0]


def test_explicit_timestamp_format(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("201501010000,1\n201501010001,2\n")
    settings = Settings()
    settings.dataset.timestamp_format = "%Y%m%d%H%M"
    series = read_activity_csv(p, settings=settings)
    assert series.timestamps[1] == datetime(2015, 1, 1, 0, 1)


def test_empty_file(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("# nothing recorded\n")
    series = read_activity_csv(p)
    assert len(series) == 0


@pytest.mark.parametrize(
    "token, expected",
    [
        ("2015-01-01T08:30:00", datetime(2015, 1, 1, 8, 30)),
        ("2015-01-01T08:30", datetime(2015, 1, 1, 8, 30)),
        ("2015-01-01 08:30:15", datetime(2015, 1, 1, 8, 30, 15)),
        ("01/02/2015 10:00", datetime(2015, 2, 1, 10)),
        ("1420070400", datetime(2015, 1, 1)),
        ("2015-01-01T00:00:00Z", datetime(2015, 1, 1)),
        ("2015-01-01T02:00:00+02:00", datetime(2015, 1, 1)),
    ],
)
def test_parse_timestamp(token, expected):
    assert parse_timestamp(token) == expected


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(ValueError):
        parse_timestamp("yesterday")


def test_bad_value_reports_line(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("# header follows\ntimestamp,activity\n2015-01-01T00:00:00,1\n2015-01-01T00:01:00,abc\n")
    with pytest.raises(ActivityParseError) as excinfo:
        read_activity_csv(p)
    assert excinfo.value.line == 4
    assert str(excinfo.value).startswith(f"{p}:4:")


def test_bad_timestamp_in_plain_file(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("2015-01-01T00:00:00,1\nnot-a-time,2\n")
    with pytest.raises(ActivityParseError) as excinfo:
        read_activity_csv(p)
    assert excinfo.value.line == 2


def test_timestamps_must_not_go_backwards(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("2015-01-01T00:05:00,1\n2015-01-01T00:04:00,2\n")
    with pytest.raises(ActivityParseError) as excinfo:
        read_activity_csv(p)
    assert excinfo.value.line == 2
    assert "precedes" in str(excinfo.value)


def test_missing_value_column(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("timestamp,steps\n2015-01-01T00:00:00,1\n")
    with pytest.raises(ActivityParseError) as excinfo:
        read_activity_csv(p)
    assert excinfo.value.line == 1
    assert "activity" in str(excinfo.value)


def test_parsed_stamps_are_naive():
    assert parse_timestamp("1420070400.5").tzinfo is None
    assert parse_timestamp("2015-01-01T00:00:00Z").tzinfo is None
    assert parse_timestamp("2015-01-01 00:00 +0100", "%Y-%m-%d %H:%M %z") == datetime(2014, 12, 31, 23)


def test_mixed_timestamp_forms(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("1420070400,1\n2015-01-01T00:01:00,2\n2015-01-01T01:02:00+01:00,3\n")
    series = read_activity_csv(p)
    assert series.timestamps == [
        datetime(2015, 1, 1),
        datetime(2015, 1, 1, 0, 1),
        datetime(2015, 1, 1, 0, 2),
    ]


def test_mixed_forms_going_backwards(tmp_path):
    p = tmp_path / "act.csv"
    p.write_text("1420070460,1\n2015-01-01T00:00:00,2\n")
    with pytest.raises(ActivityParseError) as excinfo:
        read_activity_csv(p)
    assert excinfo.value.line == 2
