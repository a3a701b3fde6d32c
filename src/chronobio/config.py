from __future__ import annotations

"""Configuration utilities for chronobio.

This module defines a hierarchical configuration schema using Pydantic models.
The :class:`Settings` container groups several specialised sub-sections such as
gap filling, activity window lengths, dataset column names and logging.
Instances can be populated from environment variables or from YAML/JSON files
with matching nested keys.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.logging import resolve_level

try:  # pragma: no cover - optional dependency
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


class SectionModel(BaseModel):
    """Base model for configuration subsections that ignores unknown fields."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Settings schema
# ---------------------------------------------------------------------------


class EpochSettings(SectionModel):
    """Options used while normalising the sampling cadence."""

    gap_sentinel: float = -999.999


class ActivitySettings(SectionModel):
    """Window lengths, in hours, of the M10 and L5 markers."""

    m10_hours: int = 10
    l5_hours: int = 5

    @field_validator("m10_hours", "l5_hours")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("window length must be positive")
        return value


class DatasetSettings(SectionModel):
    """Metadata about input activity files."""

    path: str | None = None
    timestamp_column: str = "timestamp"
    value_column: str = "activity"
    delimiter: str = ","
    timestamp_format: str | None = None


class OutputSettings(SectionModel):
    """Controls for printing and saving results."""

    precision: int = 4
    save: str | None = None


class LoggingSettings(SectionModel):
    """Logger configuration applied by the command line."""

    level: str = "WARNING"
    format: str = "%(levelname)s:%(name)s:%(message)s"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        resolve_level(value)
        return value.strip().upper()


class VizSettings(SectionModel):
    """Configuration for simple visualisation helpers."""

    title: str = "Average day"
    save: str | None = None


class Settings(BaseSettings):
    """Container for all runtime configuration sections."""

    epoch: EpochSettings = Field(default_factory=EpochSettings)
    activity: ActivitySettings = Field(default_factory=ActivitySettings)
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    viz: VizSettings = Field(default_factory=VizSettings)

    model_config = SettingsConfigDict(
        env_prefix="CHRONOBIO_",
        env_nested_delimiter="__",
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Loading utilities
# ---------------------------------------------------------------------------


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON or YAML file."""

    p = Path(path)
    text = p.read_text()
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required to load YAML files")
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise TypeError("Configuration file must define a mapping")
    return Settings.model_validate(data)
