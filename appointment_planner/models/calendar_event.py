from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .date_display import format_iso

__all__ = [
    "CalendarEvent",
]


@dataclass(frozen=True)
class CalendarEvent:
    """Flat calendar entry projected from one schedule row."""
    event_id: str  # sequential, "1"-based, assigned in emission order
    date: date
    title: str
    event_type: str  # goodrich | company | session
    category: str
    company: str
    round_label: str
    content: str
    association_registration_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.event_id,
            "date": format_iso(self.date),
            "title": self.title,
            "type": self.event_type,
            "category": self.category,
            "company": self.company,
            "round": self.round_label,
            "content": self.content,
            "associationRegistrationDate": (
                format_iso(self.association_registration_date)
                if self.association_registration_date is not None
                else None
            ),
        }
