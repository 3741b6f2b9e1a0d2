"""Domain models for the appointment planner.

Rows, classifications, the round registry, calendar events, candidate input /
feasibility output and configuration types.
"""

from .calendar_event import CalendarEvent
from .candidate import CandidateState, FeasibilityResult, TrainingStatus
from .classification import MilestoneKind, RowClassification, SourceType
from .config_models import BuildOptions, ClassifierMarkers, PlannerConfig, SourceSpec
from .row_data import RawRow
from .schedule import OrganizationEntry, RoundRecord

__all__ = [
    # Input rows
    "RawRow",
    "RowClassification",
    "SourceType",
    "MilestoneKind",
    # Registry / calendar
    "RoundRecord",
    "OrganizationEntry",
    "CalendarEvent",
    # Candidate
    "CandidateState",
    "TrainingStatus",
    "FeasibilityResult",
    # Configuration
    "PlannerConfig",
    "SourceSpec",
    "BuildOptions",
    "ClassifierMarkers",
]
