from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from .date_display import format_with_weekday

"""Round registry models.

RoundRecord is the central aggregate: one per distinct round key discovered in
a build pass, owning its OrganizationEntry tuple. Both are frozen; a fresh
registry is built on every data load.
"""

__all__ = [
    "OrganizationEntry",
    "RoundRecord",
]

_OPEN_TIME_PATTERN = re.compile(r"GP\s*오픈\s*예정\s*\(([^)]+)\)")


@dataclass(frozen=True)
class OrganizationEntry:
    """Per-organization submission schedule inside one round."""
    organization_name: str
    round_key: str  # back-reference to the owning RoundRecord
    submission_deadline: date | None = None  # 위촉 접수마감일 (row date)
    upload_date: date | None = None  # GP 업로드일 (secondary date)
    contact_memo: str = ""
    contact_person: str = ""  # "name (phone)" or name only
    registration_date: date | None = None  # 협회 등록일 parsed from content

    def to_dict(self) -> dict[str, Any]:
        return {
            "company": self.organization_name,
            "round": self.round_key,
            "acceptanceDeadline": format_with_weekday(self.submission_deadline),
            "gpUploadDate": format_with_weekday(self.upload_date),
            "recruitmentMethod": self.contact_memo,
            "manager": self.contact_person,
        }


@dataclass(frozen=True)
class RoundRecord:
    round_key: str
    open_date: date | None = None
    submission_deadline: date | None = None
    organizations: tuple[OrganizationEntry, ...] = ()
    open_content: str = ""  # raw open-announcement text, source of open_time

    @property
    def open_time(self) -> str:
        """Time note from 'GP 오픈 예정 (…)' in the open-announcement row."""
        match = _OPEN_TIME_PATTERN.search(self.open_content)
        return match.group(1) if match else ""

    @property
    def sort_date(self) -> date | None:
        return self.open_date or self.submission_deadline

    @property
    def registration_anchor(self) -> date | None:
        """Earliest association registration date among the organizations."""
        dates = [o.registration_date for o in self.organizations if o.registration_date is not None]
        return min(dates) if dates else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round_key,
            "deadline": format_with_weekday(self.submission_deadline),
            "gpOpenDate": format_with_weekday(self.open_date),
            "gpOpenTime": self.open_time,
            "companies": [o.to_dict() for o in self.organizations],
        }
