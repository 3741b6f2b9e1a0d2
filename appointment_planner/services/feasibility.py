from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, timedelta

from ..models.candidate import (
    CERTIFICATION_LABELS,
    CandidateState,
    FeasibilityResult,
    TrainingStatus,
)
from ..models.date_display import format_korean_date, format_korean_long, format_korean_month_day
from ..models.schedule import RoundRecord

"""Backward deadline derivation for a candidate's target round.

Given the candidate's declared state and the round registry:

1. select the round: earliest round opening on/after the desired date; with
   only a notice (내용증명) sent, the earliest such round opening at least
   CLEARANCE_WAIT_DAYS after the notice
2. derive deadlines from the registration anchor (earliest association
   registration date among the round's organizations) or, without one, from
   the submission deadline (own deadline or open date - 3 days)
3. verdict: clearance and training must both be satisfiable as of ``today``

Every branch returns a complete FeasibilityResult; missing data degrades to an
infeasible verdict with an explanation. The verdict is advisory.
"""

__all__ = [
    "CLEARANCE_WAIT_DAYS",
    "CLEARANCE_LEAD_DAYS",
    "TRAINING_LEAD_DAYS",
    "DEFAULT_SUBMISSION_LEAD_DAYS",
    "NOTICE_MAIL_LEAD_DAYS",
    "evaluate",
    "select_round",
]

logger = logging.getLogger(__name__)

CLEARANCE_WAIT_DAYS = 11  # 내용증명 발송 후 최소 대기일
CLEARANCE_LEAD_DAYS = 11  # 협회말소 기한 = 기준일 - 11
TRAINING_LEAD_DAYS = 7  # 등록교육 기한 = 기준일 - 7
DEFAULT_SUBMISSION_LEAD_DAYS = 3  # 마감일 미기재 시 GP 오픈 - 3
NOTICE_MAIL_LEAD_DAYS = 2  # 내용증명 발송 기한 = 말소 기한 - 2

_SEPARATOR = "─" * 40
_PASSED_FLAG = " (⚠️ 기한 경과)"


def _greeting(candidate: CandidateState, desired_text: str, suffix: str = "") -> str:
    name = candidate.name or "지원자"
    return f"{name}님, 굿리치 위촉을 {desired_text}{suffix} 원하시는군요."


def _infeasible(candidate: CandidateState, lines: Sequence[str]) -> FeasibilityResult:
    return FeasibilityResult(
        selected_round=None,
        open_date=None,
        submission_deadline=None,
        clearance_deadline=None,
        training_deadline=None,
        is_possible=False,
        explanation_lines=tuple(lines),
        desired_date=candidate.desired_date,
    )


def _upcoming_rounds(registry: Sequence[RoundRecord], desired: date) -> list[RoundRecord]:
    dated = [r for r in registry if r.open_date is not None and r.open_date >= desired]
    return sorted(dated, key=lambda r: r.open_date)


def select_round(candidate: CandidateState, registry: Sequence[RoundRecord]) -> RoundRecord | None:
    """Round the candidate can target, or None.

    With only a notice sent, the first upcoming round opening on/after
    notice + CLEARANCE_WAIT_DAYS is taken, skipping earlier rounds.
    """
    if candidate.desired_date is None:
        return None
    upcoming = _upcoming_rounds(registry, candidate.desired_date)
    if not upcoming:
        return None
    if candidate.clearance_completed:
        return upcoming[0]
    if candidate.notice_sent_date is not None:
        earliest = candidate.notice_sent_date + timedelta(days=CLEARANCE_WAIT_DAYS)
        return next((r for r in upcoming if r.open_date >= earliest), None)
    return None


def _clearance_lines(
    candidate: CandidateState, clearance_deadline: date, today: date
) -> list[str]:
    if candidate.clearance_completed:
        return [
            "1. 협회말소 ✓",
            "   협회말소를 완료하셨거나 내용증명을 발송하셨습니다.",
        ]
    passed = today > clearance_deadline
    lines = [
        f"1. 협회 말소{_PASSED_FLAG if passed else ''}",
        f"   {format_korean_date(clearance_deadline)}까지 협회 말소를 완료해주세요.",
    ]
    if candidate.notice_sent_date is not None:
        mail_by = clearance_deadline - timedelta(days=NOTICE_MAIL_LEAD_DAYS)
        lines.append(f"   내용증명으로 말소하시려면 {format_korean_month_day(mail_by)}까지 발송하셔야 합니다.")
    lines += [
        "",
        "   💡 협회말소 절차:",
        "   - 기존 소속사에 말소 요청",
        "   - 또는 내용증명 우편으로 직접 협회에 말소 신청",
    ]
    return lines


def _certification_lines(candidate: CandidateState) -> list[str]:
    held = [label for key, label in CERTIFICATION_LABELS.items() if key in candidate.certifications]
    missing = [label for key, label in CERTIFICATION_LABELS.items() if key not in candidate.certifications]
    lines = [
        "2. 판매 자격",
        f"   보유 자격: {', '.join(held) if held else '없음'}",
    ]
    if missing:
        lines += [
            "",
            f"   추가 필요 자격: {', '.join(missing)}",
            "   → 시험 응시가 필요합니다. 관리자에게 문의해주세요.",
        ]
    return lines


def _training_lines(candidate: CandidateState, training_deadline: date, today: date) -> list[str]:
    if candidate.training_status is TrainingStatus.NONE:
        passed = today > training_deadline
        return [
            f"3. 등록교육{_PASSED_FLAG if passed else ''}",
            f"   {format_korean_date(training_deadline)}까지 등록교육을 이수해주세요.",
            "",
            "   💡 등록교육 안내:",
            "   - 보유 자격에 따라 신규/경력 등록교육 이수",
            "   - 수료 후 수료증을 위촉지원사이트에 업로드",
        ]
    course = "신규등록교육" if candidate.training_status is TrainingStatus.NEW else "경력등록교육"
    return [
        "3. 등록교육 ✓",
        f"   {course}을 이수하셨습니다.",
    ]


def _submission_lines(submission_deadline: date) -> list[str]:
    return [
        "4. 위촉지원사이트 서류 제출",
        f"   {format_korean_long(submission_deadline)}까지 완료",
        "   - 정보 입력 및 서류 업로드",
        "   - 원본 서류 발송",
        "   - 사원등록 신청 완료",
    ]


def _insurance_lines(candidate: CandidateState) -> list[str]:
    if candidate.insurance_checked:
        return ["5. 보증보험 조회 ✓", "   보증보험 조회를 완료하셨습니다."]
    return ["5. 보증보험 조회", "   보증보험 조회를 완료해주세요."]


def evaluate(
    candidate: CandidateState,
    registry: Sequence[RoundRecord],
    *,
    today: date | None = None,
) -> FeasibilityResult:
    """Evaluate whether the candidate can make a round and by when.

    Args:
        candidate: Declared candidate state
        registry: Round registry (not mutated)
        today: Evaluation date for deadline checks (default: today)

    Returns:
        FeasibilityResult; never raises for missing data
    """
    today = today or date.today()

    if not registry or candidate.desired_date is None:
        return _infeasible(candidate, ["데이터를 불러올 수 없습니다."])

    desired_text = format_korean_long(candidate.desired_date)
    selected = select_round(candidate, registry)

    if selected is None:
        if not candidate.clearance_completed and candidate.notice_sent_date is not None:
            logger.debug(f"notice sent {candidate.notice_sent_date} -> 11-day wait not met")
            return _infeasible(candidate, [
                _greeting(candidate, desired_text, "로"),
                "아쉽지만 이 일정에 굿리치 코드 발급을 현재 스케쥴로는 불가능합니다.",
                "",
                f"내용증명 발송일({format_korean_date(candidate.notice_sent_date)}) 기준으로",
                f"최소한 {CLEARANCE_WAIT_DAYS}일 이후에 위촉이 가능합니다.",
                "",
                "다른 위촉일정을 확인해 볼까요?",
            ])
        if not candidate.clearance_completed:
            return _infeasible(candidate, [
                _greeting(candidate, desired_text, "로"),
                "협회말소나 내용증명 발송을 먼저 진행하셔야 위촉 차수를 안내해 드릴 수 있습니다.",
                "",
                "협회말소와 등록교육 방법을 안내해 드릴까요?",
                "다른 위촉일정을 확인해 볼까요?",
            ])
        return _infeasible(candidate, [
            _greeting(candidate, desired_text, "로"),
            "아쉽지만 현재 스케쥴에서 해당 일정을 찾을 수 없습니다.",
            "",
            "협회말소와 등록교육 방법을 안내해 드릴까요?",
            "다른 위촉일정을 확인해 볼까요?",
        ])

    open_date: date = selected.open_date  # type: ignore[assignment]  # select_round: dated only
    submission_deadline = selected.submission_deadline or (
        open_date - timedelta(days=DEFAULT_SUBMISSION_LEAD_DAYS)
    )
    anchor = selected.registration_anchor or submission_deadline
    clearance_deadline = anchor - timedelta(days=CLEARANCE_LEAD_DAYS)
    training_deadline = anchor - timedelta(days=TRAINING_LEAD_DAYS)

    clearance_ok = candidate.clearance_completed or (
        candidate.notice_sent_date is not None and today <= clearance_deadline
    )
    training_ok = candidate.training_status is not TrainingStatus.NONE or today <= training_deadline
    is_possible = clearance_ok and training_ok

    lines = [
        _greeting(candidate, desired_text),
        "위촉 절차를 안내 드릴게요." if is_possible else "현재 상태로는 희망하시는 날짜에 위촉이 어려울 수 있습니다.",
        "",
        f"📅 예정 위촉 차수: {selected.round_key}",
        "",
    ]
    lines += _clearance_lines(candidate, clearance_deadline, today)
    lines.append("")
    lines += _certification_lines(candidate)
    lines.append("")
    lines += _training_lines(candidate, training_deadline, today)
    lines.append("")
    lines += _submission_lines(submission_deadline)
    lines.append("")
    lines += _insurance_lines(candidate)
    lines += ["", _SEPARATOR, ""]
    if is_possible:
        lines.append("✅ 위 일정에 맞춰 진행하시면 원하시는 날짜에 위촉이 가능합니다!")
    else:
        lines.append("⚠️ 위 일정을 맞추기 어려운 경우, 다음 차수로 위촉을 진행하시는 것을 권장드립니다.")
    lines += ["", "📞 자세한 안내가 필요하시면 담당자에게 문의해주세요."]

    return FeasibilityResult(
        selected_round=selected.round_key,
        open_date=selected.open_date,
        submission_deadline=submission_deadline,
        clearance_deadline=clearance_deadline,
        training_deadline=training_deadline,
        is_possible=is_possible,
        explanation_lines=tuple(lines),
        desired_date=candidate.desired_date,
    )
