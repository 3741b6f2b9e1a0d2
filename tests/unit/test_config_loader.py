from __future__ import annotations

from pathlib import Path

import pytest

from appointment_planner.config.loader import ConfigError, load_config
from appointment_planner.models.config_models import AttachmentMode, MilestoneConflict


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.schedule_source.path == "./data/schedule.csv"
    assert cfg.contacts_source is not None and cfg.contacts_source.path == "./data/contacts.csv"
    assert cfg.settings_source is not None
    assert cfg.output_path == "./public/data.json"
    assert cfg.request_timeout_seconds == 5.0
    assert cfg.timezone == "UTC"
    assert cfg.spreadsheet_id is None
    assert cfg.options.attachment_mode is AttachmentMode.ORGANIZATION
    assert cfg.options.milestone_conflict is MilestoneConflict.FIRST
    assert cfg.options.markers.internal == "굿리치"


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("sources: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_missing_schedule(write_config: Path):
    write_config.write_text("sources:\n  contacts:\n    path: ./c.csv\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_source_needs_path_or_sheet(write_config: Path):
    write_config.write_text("sources:\n  schedule: {}\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_bad_enum_and_timezone(write_config: Path):
    base = write_config.read_text(encoding="utf-8")
    write_config.write_text(base + "milestone_conflict: newest\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)

    write_config.write_text(base.replace("timezone: UTC", "timezone: Mars/Olympus"), encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "unknown timezone" in str(e.value)


def test_load_config_options_and_markers(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + (
        "attachment_mode: appointment_marker\n"
        "milestone_conflict: last\n"
        "markers:\n"
        "  internal: 본사\n"
        "  external_session: [세종]\n"
    )
    write_config.write_text(text, encoding="utf-8")
    cfg = load_config(write_config)
    assert cfg.options.attachment_mode is AttachmentMode.APPOINTMENT_MARKER
    assert cfg.options.milestone_conflict is MilestoneConflict.LAST
    assert cfg.options.markers.internal == "본사"
    assert cfg.options.markers.external_session == ("세종",)
    # 지정하지 않은 마커는 기본값
    assert cfg.options.markers.open_announcement == "GP 오픈 예정"


def test_spreadsheet_id_from_env_fills_default_tabs(write_config: Path, monkeypatch):
    write_config.write_text("sources:\n  schedule:\n    sheet: 입력\n", encoding="utf-8")
    cfg = load_config(write_config)
    assert cfg.spreadsheet_id is None
    assert cfg.contacts_source is None and cfg.settings_source is None

    monkeypatch.setenv("GOOGLE_SHEETS_SPREADSHEET_ID", "sheet-123")
    cfg = load_config(write_config)
    assert cfg.spreadsheet_id == "sheet-123"
    assert cfg.contacts_source is not None and cfg.contacts_source.sheet == "위촉문자"
    assert cfg.settings_source is not None and cfg.settings_source.sheet == "설정"


def test_legacy_env_name(write_config: Path, monkeypatch):
    monkeypatch.setenv("GOOGLE_SHEET_ID", "legacy-id")
    assert load_config(write_config).spreadsheet_id == "legacy-id"
