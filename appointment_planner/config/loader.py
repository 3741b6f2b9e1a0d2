from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    AttachmentMode,
    BuildOptions,
    ClassifierMarkers,
    MilestoneConflict,
    PlannerConfig,
    SourceSpec,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default config/planner.yml)
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults and environment overrides

Environment (already loaded from .env by the CLI) wins over the file:
GOOGLE_SHEETS_SPREADSHEET_ID / GOOGLE_SHEET_ID -> sources.spreadsheet_id
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/planner.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

# 시트 탭 기본값 (구글 시트 원본 구성)
_DEFAULT_SHEETS = {
    "schedule": "입력",
    "contacts": "위촉문자",
    "settings": "설정",
}


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _source(name: str, raw: dict[str, Any] | None, spreadsheet_id: str | None) -> SourceSpec | None:
    """Configured source; unconfigured tabs fall back to the default tab name
    when a spreadsheet is available, otherwise the source is skipped."""
    if raw is None:
        if spreadsheet_id:
            return SourceSpec(name=name, sheet=_DEFAULT_SHEETS[name])
        return None
    return SourceSpec(name=name, path=raw.get("path"), sheet=raw.get("sheet"))


def _markers(raw: dict[str, Any] | None) -> ClassifierMarkers:
    if not raw:
        return ClassifierMarkers()
    values = dict(raw)
    if "external_session" in values:
        values["external_session"] = tuple(values["external_session"])
    return ClassifierMarkers(**values)


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> PlannerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    sources = data["sources"]
    spreadsheet_id = (
        os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID")
        or os.getenv("GOOGLE_SHEET_ID")
        or sources.get("spreadsheet_id")
    )
    options = BuildOptions(
        markers=_markers(data.get("markers")),
        attachment_mode=AttachmentMode(data.get("attachment_mode", "organization")),
        milestone_conflict=MilestoneConflict(data.get("milestone_conflict", "first")),
    )
    timezone = data.get("timezone", "UTC")
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {timezone}") from e

    raw_schedule = sources["schedule"]
    return PlannerConfig(
        schedule_source=SourceSpec(
            name="schedule", path=raw_schedule.get("path"), sheet=raw_schedule.get("sheet")
        ),
        contacts_source=_source("contacts", sources.get("contacts"), spreadsheet_id),
        settings_source=_source("settings", sources.get("settings"), spreadsheet_id),
        spreadsheet_id=spreadsheet_id,
        output_path=data.get("output_path", "public/data.json"),
        request_timeout_seconds=float(data.get("request_timeout_seconds", 30.0)),
        timezone=timezone,
        options=options,
    )
