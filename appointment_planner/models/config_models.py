from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the appointment planner.

Separate from the YAML loader in ``config/loader.py``: the loader validates and
resolves, these types are what the pipeline receives.
"""

__all__ = [
    "SourceSpec",
    "ClassifierMarkers",
    "AttachmentMode",
    "MilestoneConflict",
    "BuildOptions",
    "PlannerConfig",
    "DEFAULT_OPTIONS",
]


@dataclass(frozen=True)
class SourceSpec:
    """Where one tabular source comes from.

    Exactly one of ``path`` (local .csv / .xlsx) or ``sheet`` (tab name in the
    configured Google spreadsheet) is used; ``path`` wins when both are set.
    For workbooks ``sheet`` also selects the tab.
    """
    name: str  # schedule | contacts | settings
    path: str | None = None
    sheet: str | None = None

    @property
    def label(self) -> str:
        return self.sheet or self.path or self.name


@dataclass(frozen=True)
class ClassifierMarkers:
    """Marker tokens the row classifier looks for."""
    internal: str = "굿리치"
    external_session: tuple[str, ...] = ("세종", "협회")
    open_announcement: str = "GP 오픈 예정"
    submission_deadline: str = "자격추가/전산승인마감"
    appointment: str = "위촉"
    registration: str = "생명보험협회"  # "<registration> 등록일 M/D" in content


class AttachmentMode(Enum):
    """Which rows may attach organizations to rounds.

    ORGANIZATION: rows classified as organization submissions.
    APPOINTMENT_MARKER: any row whose category carries the appointment marker.
    """
    ORGANIZATION = "organization"
    APPOINTMENT_MARKER = "appointment_marker"


class MilestoneConflict(Enum):
    """Which row wins when several rows give a round the same milestone."""
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class BuildOptions:
    markers: ClassifierMarkers = field(default_factory=ClassifierMarkers)
    attachment_mode: AttachmentMode = AttachmentMode.ORGANIZATION
    milestone_conflict: MilestoneConflict = MilestoneConflict.FIRST


DEFAULT_OPTIONS = BuildOptions()


@dataclass(frozen=True)
class PlannerConfig:
    """Root configuration object."""
    schedule_source: SourceSpec
    contacts_source: SourceSpec | None = None  # None -> no contacts (empty memo/manager)
    settings_source: SourceSpec | None = None  # None -> default guidance / checklist
    spreadsheet_id: str | None = None
    output_path: str = "public/data.json"
    request_timeout_seconds: float = 30.0
    timezone: str = "UTC"
    options: BuildOptions = DEFAULT_OPTIONS
