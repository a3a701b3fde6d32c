import json
import pytest
from pydantic import ValidationError

from chronobio.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.activity.m10_hours == 10
    assert s.activity.l5_hours == 5
    assert s.epoch.gap_sentinel == -999.999
    assert s.dataset.timestamp_column == "timestamp"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CHRONOBIO_ACTIVITY__L5_HOURS", "4")
    monkeypatch.setenv("CHRONOBIO_DATASET__VALUE_COLUMN", "counts")
    s = Settings()
    assert s.activity.l5_hours == 4
    assert s.dataset.value_column == "counts"


def test_invalid_window_length():
    with pytest.raises(ValidationError):
        Settings.model_validate({"activity": {"m10_hours": 0}})


def test_load_settings_json(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"epoch": {"gap_sentinel": -1.5}, "output": {"precision": 2}}))
    s = load_settings(p)
    assert s.epoch.gap_sentinel == -1.5
    assert s.output.precision == 2


def test_load_settings_rejects_non_mapping(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]")
    with pytest.raises(TypeError):
        load_settings(p)


try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


@pytest.mark.skipif(yaml is None, reason="PyYAML not installed")
def test_load_settings_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("activity:\n  m10_hours: 8\ndataset:\n  delimiter: ';'\n")
    s = load_settings(p)
    assert s.activity.m10_hours == 8
    assert s.dataset.delimiter == ";"


def test_logging_level_is_normalised():
    s = Settings.model_validate({"logging": {"level": "debug"}})
    assert s.logging.level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings.model_validate({"logging": {"level": "chatty"}})
