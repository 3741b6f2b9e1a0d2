from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..models.calendar_event import CalendarEvent
from ..models.classification import RowClassification
from ..models.config_models import ClassifierMarkers
from ..models.row_data import RawRow
from .date_normalizer import find_registration_date, normalize_date
from .row_classifier import DEFAULT_MARKERS, classify_rows

__all__ = [
    "project_events",
    "build_title",
]


def build_title(category: str, company: str, content: str) -> str:
    """'<category> <company> - <content>', skipping empty parts."""
    prefix = " ".join(part for part in (category, company) if part)
    return " - ".join(part for part in (prefix, content) if part)


def project_events(
    rows: Sequence[RawRow],
    classifications: Sequence[RowClassification] | None = None,
    filter_date: date | None = None,
    *,
    markers: ClassifierMarkers = DEFAULT_MARKERS,
    today: date | None = None,
) -> list[CalendarEvent]:
    """One calendar event per row with a parseable date and non-empty content.

    Independent of the round registry: rows classified as 'other' still show
    up here. With ``filter_date`` only same-day events are emitted; ids are
    assigned to emitted events only.
    """
    if classifications is None:
        classifications = classify_rows(rows, markers)

    events: list[CalendarEvent] = []
    for row, tag in zip(rows, classifications, strict=True):
        event_date = normalize_date(row.date, today=today)
        if event_date is None:
            continue
        if filter_date is not None and event_date != filter_date:
            continue
        if not row.content:
            continue
        events.append(
            CalendarEvent(
                event_id=str(len(events) + 1),
                date=event_date,
                title=build_title(row.category, row.company, row.content),
                event_type=tag.source_type.display_type,
                category=row.category,
                company=row.company,
                round_label=row.round_label,
                content=row.content,
                association_registration_date=find_registration_date(
                    row.content, markers.registration, today=today
                ),
            )
        )
    return events
