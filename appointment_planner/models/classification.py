from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Row classification tags.

RowClassification is derived from a RawRow's category / content / company text
on every read and never stored. The predicate flags are independent: a row may
announce a GP open and a deadline at the same time, and ``milestone_kind`` only
reports the first satisfied kind.
"""

__all__ = [
    "SourceType",
    "MilestoneKind",
    "RowClassification",
]


class SourceType(Enum):
    """Who published the row.

    - INTERNAL: the company's own schedule rows (굿리치)
    - ORGANIZATION: insurer / partner organization rows
    - EXTERNAL_SESSION: exam / association session rows (세종, 협회)
    """
    INTERNAL = "internal"
    ORGANIZATION = "organization"
    EXTERNAL_SESSION = "external_session"

    @property
    def display_type(self) -> str:
        """Event ``type`` value used by the calendar feed."""
        return _DISPLAY_TYPES[self]


_DISPLAY_TYPES = {
    SourceType.INTERNAL: "goodrich",
    SourceType.ORGANIZATION: "company",
    SourceType.EXTERNAL_SESSION: "session",
}


class MilestoneKind(Enum):
    OPEN_ANNOUNCEMENT = "open_announcement"
    SUBMISSION_DEADLINE = "submission_deadline"
    ORGANIZATION_SUBMISSION = "organization_submission"
    OTHER = "other"


@dataclass(frozen=True)
class RowClassification:
    source_type: SourceType
    milestone_kind: MilestoneKind
    is_open_announcement: bool = False
    is_submission_deadline: bool = False
    is_organization_submission: bool = False
    is_appointment: bool = False  # category carries the appointment marker (위촉)

    @property
    def is_milestone(self) -> bool:
        return self.milestone_kind is not MilestoneKind.OTHER
