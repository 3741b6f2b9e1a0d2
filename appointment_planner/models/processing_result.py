from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .calendar_event import CalendarEvent
from .schedule import RoundRecord
from .settings import AdminSettings

"""Pipeline output models.

PlannerDataset is the payload handed to the presentation layer (serialized to
data.json). ProcessingResult wraps it with the run metrics used by the
SUMMARY line.
"""

__all__ = [
    "PlannerDataset",
    "ProcessingResult",
]


@dataclass(frozen=True)
class PlannerDataset:
    settings: AdminSettings
    schedules: tuple[RoundRecord, ...]
    calendar_events: tuple[CalendarEvent, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "requiredDocuments": self.settings.guidance,
            "checklist": [item.to_dict() for item in self.settings.checklist],
            "recipients": [r.to_dict() for r in self.settings.recipients],
            "schedules": [s.to_dict() for s in self.schedules],
            "calendarEvents": [e.to_dict() for e in self.calendar_events],
        }


@dataclass(frozen=True)
class ProcessingResult:
    dataset: PlannerDataset
    schedule_rows: int  # data rows read from the schedule source
    issues: int  # ErrorRecords raised during the run
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    filter_date: date | None = None

    @property
    def total_rounds(self) -> int:
        return len(self.dataset.schedules)

    @property
    def total_companies(self) -> int:
        return sum(len(s.organizations) for s in self.dataset.schedules)

    @property
    def total_events(self) -> int:
        return len(self.dataset.calendar_events)
