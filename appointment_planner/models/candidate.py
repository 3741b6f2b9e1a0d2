from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from .date_display import format_iso, format_korean_long

"""Candidate input and feasibility output models.

CandidateState is supplied by the caller (the onboarding form); the planner
never owns or mutates it. FeasibilityResult is produced fresh per evaluation.
"""

__all__ = [
    "TrainingStatus",
    "CERTIFICATION_LABELS",
    "CandidateState",
    "FeasibilityResult",
]


class TrainingStatus(Enum):
    NONE = "none"
    NEW = "new"  # 신규등록교육 이수
    EXPERIENCED = "experienced"  # 경력등록교육 이수


# Canonical certification categories, in display order
CERTIFICATION_LABELS: dict[str, str] = {
    "life": "생명보험",
    "damage": "손해보험",
    "third": "제3보험",
    "variable": "변액보험",
}


@dataclass(frozen=True)
class CandidateState:
    desired_date: date | None
    clearance_completed: bool = False  # 협회말소 완료
    notice_sent_date: date | None = None  # 내용증명 발송일
    certifications: frozenset[str] = frozenset()  # keys of CERTIFICATION_LABELS
    training_status: TrainingStatus = TrainingStatus.NONE
    insurance_checked: bool = False  # 보증보험 조회
    name: str = ""


@dataclass(frozen=True)
class FeasibilityResult:
    selected_round: str | None
    open_date: date | None
    submission_deadline: date | None
    clearance_deadline: date | None
    training_deadline: date | None
    is_possible: bool
    explanation_lines: tuple[str, ...]
    desired_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        # 차수 미선택 시 gpOpenDate 자리에 희망일을 표시
        shown = self.open_date if self.open_date is not None else self.desired_date
        return {
            "round": self.selected_round or "",
            "gpOpenDate": format_korean_long(shown),
            "deadlineDate": format_iso(self.submission_deadline),
            "associationDeadline": format_iso(self.clearance_deadline),
            "educationDeadline": format_iso(self.training_deadline),
            "isPossible": self.is_possible,
            "messages": list(self.explanation_lines),
        }
