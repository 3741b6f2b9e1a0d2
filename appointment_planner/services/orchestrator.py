from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

import requests

from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import PlannerConfig, SourceSpec
from ..models.error_record import ADDRESS_MISSING, UNPARSEABLE_DATE, ErrorRecord
from ..models.processing_result import PlannerDataset, ProcessingResult
from ..models.row_data import RawRow, rows_from_cells
from ..sheets.reader import load_source
from .calendar_projector import project_events
from .date_normalizer import normalize_date
from .recipients import merge_recipients, missing_addresses
from .row_classifier import classify_rows
from .schedule_builder import build_schedule
from .settings_parser import build_contact_map, parse_admin_settings
from .source_cache import SourceCache

"""Pipeline orchestration.

1. Load the schedule / contact / settings sources (one atomic load each,
   through the caller's SourceCache when given)
2. Classify rows once, build the round registry and the calendar feed from
   the same classified rows
3. Merge recipient addresses, record data issues, return the dataset

SourceUnavailableError from the reader propagates: it is the only failure
that stops a load. Data problems are logged and recorded, never raised.
"""

__all__ = [
    "ProcessingError",
    "local_today",
    "load_sources",
    "build_dataset",
    "write_dataset",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Raised when the built dataset cannot be written."""


def local_today(config: PlannerConfig) -> date:
    """Today's date in the configured timezone."""
    return datetime.now(ZoneInfo(config.timezone)).date()


def _load_one(
    spec: SourceSpec | None,
    config: PlannerConfig,
    cache: SourceCache | None,
    session: requests.Session | None,
) -> list[list[Any]]:
    if spec is None:
        return []

    def _load() -> list[list[Any]]:
        return load_source(
            spec,
            spreadsheet_id=config.spreadsheet_id,
            timeout_seconds=config.request_timeout_seconds,
            session=session,
        )

    if cache is None:
        return _load()
    return cache.get_or_load(f"{spec.name}:{spec.label}", _load)


def load_sources(
    config: PlannerConfig,
    *,
    cache: SourceCache | None = None,
    session: requests.Session | None = None,
) -> tuple[list[list[Any]], list[list[Any]], list[list[Any]]]:
    """Schedule, contact and settings rows (header stripped)."""
    return (
        _load_one(config.schedule_source, config, cache, session),
        _load_one(config.contacts_source, config, cache, session),
        _load_one(config.settings_source, config, cache, session),
    )


def _record_date_issues(
    rows: Sequence[RawRow], sheet: str, error_log: ErrorLogBuffer, today: date
) -> None:
    for row in rows:
        if row.date is None or not row.content:
            continue
        if normalize_date(row.date, today=today) is None:
            logger.warning(f"row {row.row_number}: unparseable date {row.date!r} -> skipped")
            error_log.append(
                ErrorRecord.create("schedule", sheet, row.row_number, UNPARSEABLE_DATE, f"unparseable date: {row.date!r}")
            )


def build_dataset(
    config: PlannerConfig,
    *,
    filter_date: date | None = None,
    cache: SourceCache | None = None,
    today: date | None = None,
    error_log: ErrorLogBuffer | None = None,
    session: requests.Session | None = None,
) -> ProcessingResult:
    """Load all sources and derive the round registry and calendar feed.

    Args:
        config: Planner configuration
        filter_date: Restrict registry and calendar to this day
        cache: Caller-owned source cache (None = always fetch)
        today: Reference date (default: today in the configured timezone)
        error_log: Issue buffer (a fresh one is used and flushed when None)
        session: HTTP session for spreadsheet sources

    Raises:
        SourceUnavailableError: a source could not be obtained
    """
    start_time = datetime.now(UTC)
    today = today or local_today(config)
    owns_log = error_log is None
    issues = error_log if error_log is not None else ErrorLogBuffer()
    issues_before = issues.total

    schedule_cells, contact_cells, settings_cells = load_sources(config, cache=cache, session=session)
    if filter_date is not None:
        logger.info(f"filtering on {filter_date.isoformat()}")

    rows = rows_from_cells(schedule_cells)
    options = config.options
    classifications = classify_rows(rows, options.markers)
    _record_date_issues(rows, config.schedule_source.label, issues, today)

    contact_map = build_contact_map(contact_cells)
    settings = parse_admin_settings(settings_cells)

    schedules = build_schedule(
        rows,
        contact_map,
        classifications=classifications,
        filter_date=filter_date,
        options=options,
        today=today,
    )
    events = project_events(
        rows, classifications, filter_date, markers=options.markers, today=today
    )

    recipients = merge_recipients(settings.recipients, schedules)
    settings_label = config.settings_source.label if config.settings_source else "settings"
    for recipient in missing_addresses(recipients):
        logger.warning(f"address not entered: {recipient.company}")
        issues.append(
            ErrorRecord.create("settings", settings_label, -1, ADDRESS_MISSING, recipient.company)
        )

    dataset = PlannerDataset(
        settings=replace(settings, recipients=recipients),
        schedules=tuple(schedules),
        calendar_events=tuple(events),
    )

    if owns_log:
        try:
            issues.flush()
        except OSError as e:
            logger.warning(f"issue log flush failed: {e}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        dataset=dataset,
        schedule_rows=len(rows),
        issues=issues.total - issues_before,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        filter_date=filter_date,
    )


def write_dataset(dataset: PlannerDataset, path: Path) -> Path:
    """Write the dataset as UTF-8 JSON (data.json consumed by the web layer)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(dataset.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError as e:
        raise ProcessingError(f"cannot write dataset to {path}: {e}") from e
    return path
