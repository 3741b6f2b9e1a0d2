from __future__ import annotations

from datetime import date

from appointment_planner.models.config_models import AttachmentMode, BuildOptions, MilestoneConflict
from appointment_planner.models.settings import ContactInfo
from appointment_planner.services.schedule_builder import build_schedule
from conftest import TODAY, make_row


def test_open_and_deadline_rows_form_one_round():
    """Deadline row before the open row still lands on the same round."""
    rows = [
        make_row("2025. 5. 4", "굿리치", round_label="3-1차", content="자격추가/전산승인마감", row_number=1),
        make_row("2025-05-07", "굿리치", round_label="3-1차", content="GP 오픈 예정 (10:00)", row_number=2),
    ]
    registry = build_schedule(rows, today=TODAY)
    assert len(registry) == 1
    record = registry[0]
    assert record.round_key == "3-1"
    assert record.open_date == date(2025, 5, 7)
    assert record.submission_deadline == date(2025, 5, 4)
    assert record.open_time == "10:00"
    assert record.organizations == ()


def test_build_is_deterministic(schedule_rows):
    first = build_schedule(schedule_rows, today=TODAY)
    second = build_schedule(schedule_rows, today=TODAY)
    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_sample_registry(schedule_rows):
    contacts = {"한화생명": ContactInfo(memo="온라인 위촉", manager="김담당 (010-1111-2222)")}
    registry = build_schedule(schedule_rows, contacts, today=TODAY)
    assert [r.round_key for r in registry] == ["3-1", "3-2"]

    first, second = registry
    assert [o.organization_name for o in first.organizations] == ["한화생명", "삼성화재"]
    hanwha = first.organizations[0]
    assert hanwha.submission_deadline == date(2025, 5, 2)
    assert hanwha.upload_date == date(2025, 5, 5)
    assert hanwha.registration_date == date(2025, 4, 28)
    assert hanwha.contact_memo == "온라인 위촉"
    assert hanwha.contact_person == "김담당 (010-1111-2222)"
    # 연락처가 없는 회사는 빈 문자열
    samsung = first.organizations[1]
    assert samsung.contact_memo == "" and samsung.contact_person == ""

    # '3-1,3-2차' 행은 두 차수 모두에 붙는다
    assert [o.organization_name for o in second.organizations] == ["삼성화재"]
    assert second.organizations[0].round_key == "3-2"
    assert second.open_date == date(2025, 5, 21)
    assert second.submission_deadline is None


def test_unparseable_date_row_contributes_nothing(schedule_rows):
    registry = build_schedule(schedule_rows, today=TODAY)
    names = {o.organization_name for r in registry for o in r.organizations}
    assert "흥국생명" not in names


def test_internal_row_without_date_does_not_register_round():
    rows = [
        make_row(None, "굿리치", round_label="4-1차", content="GP 오픈 예정"),
        make_row("???", "굿리치", round_label="4-2차", content="GP 오픈 예정"),
    ]
    assert build_schedule(rows, today=TODAY) == []


def test_internal_row_other_kind_registers_key_without_dates():
    rows = [make_row("2025-05-01", "굿리치", round_label="4-1차", content="팀 미팅")]
    registry = build_schedule(rows, today=TODAY)
    assert len(registry) == 1
    assert registry[0].open_date is None and registry[0].submission_deadline is None


def test_ordering_open_then_deadline_then_undated():
    rows = [
        make_row("2025-06-01", "굿리치", round_label="c차", content="팀 미팅", row_number=1),
        make_row("2025-05-20", "굿리치", round_label="b차", content="자격추가/전산승인마감", row_number=2),
        make_row("2025-05-25", "굿리치", round_label="a차", content="GP 오픈 예정", row_number=3),
        make_row("2025-05-20", "굿리치", round_label="d차", content="GP 오픈 예정", row_number=4),
    ]
    registry = build_schedule(rows, today=TODAY)
    # b (deadline 5/20) 와 d (open 5/20) 는 동일 날짜: 발견 순서 유지
    assert [r.round_key for r in registry] == ["b", "d", "a", "c"]


def test_milestone_conflict_policy():
    rows = [
        make_row("2025-05-07", "굿리치", round_label="3-1차", content="GP 오픈 예정 (10:00)", row_number=1),
        make_row("2025-05-08", "굿리치", round_label="3-1차", content="GP 오픈 예정 (15:00)", row_number=2),
    ]
    first = build_schedule(rows, today=TODAY)[0]
    assert first.open_date == date(2025, 5, 7)
    assert first.open_time == "10:00"

    last = build_schedule(rows, options=BuildOptions(milestone_conflict=MilestoneConflict.LAST), today=TODAY)[0]
    assert last.open_date == date(2025, 5, 8)
    assert last.open_time == "15:00"


def test_primary_key_only_for_discovery():
    rows = [make_row("2025-05-07", "굿리치", round_label="3-1,3-2차", content="GP 오픈 예정")]
    registry = build_schedule(rows, today=TODAY)
    assert [r.round_key for r in registry] == ["3-1"]


def test_filter_keeps_rounds_opening_or_closing_that_day(schedule_rows):
    registry = build_schedule(schedule_rows, filter_date=date(2025, 5, 4), today=TODAY)
    assert [r.round_key for r in registry] == ["3-1"]
    # 필터 후에도 조직 연결은 동일
    assert len(registry[0].organizations) == 2


def test_filter_without_match_is_empty(schedule_rows):
    assert build_schedule(schedule_rows, filter_date=date(2025, 1, 1), today=TODAY) == []


def test_attachment_mode_appointment_marker():
    rows = [
        make_row("2025-05-07", "굿리치", round_label="3-1차", content="GP 오픈 예정", row_number=1),
        make_row("2025-05-02", "회사일정", "한화생명", "3-1차", "서류 마감", row_number=2),
        make_row("2025-05-03", "협회 위촉", "생명보험협회", "3-1차", "등록", row_number=3),
    ]
    default = build_schedule(rows, today=TODAY)[0]
    assert [o.organization_name for o in default.organizations] == ["한화생명"]

    marker = build_schedule(rows, options=BuildOptions(attachment_mode=AttachmentMode.APPOINTMENT_MARKER), today=TODAY)[0]
    assert [o.organization_name for o in marker.organizations] == ["생명보험협회"]


def test_to_dict_shape(schedule_rows):
    record = build_schedule(schedule_rows, today=TODAY)[0]
    data = record.to_dict()
    assert data["round"] == "3-1"
    assert data["deadline"] == "5/4(일)"
    assert data["gpOpenDate"] == "5/7(수)"
    assert data["gpOpenTime"] == "10:00"
    assert data["companies"][0] == {
        "company": "한화생명",
        "round": "3-1",
        "acceptanceDeadline": "5/2(금)",
        "gpUploadDate": "5/5(월)",
        "recruitmentMethod": "",
        "manager": "",
    }
