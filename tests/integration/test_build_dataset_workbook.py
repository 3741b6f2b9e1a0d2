from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pandas as pd

from appointment_planner.cli.__main__ import main as cli_main
from appointment_planner.config.loader import load_config
from appointment_planner.logging.error_log import ErrorLogBuffer
from appointment_planner.services.feasibility import evaluate
from appointment_planner.services.orchestrator import build_dataset
from appointment_planner.models.candidate import CandidateState
from conftest import CONTACT_CELLS, SCHEDULE_HEADER, SETTINGS_CELLS

"""End-to-end run over a workbook with native date cells, serial numbers and
text dates mixed in one column (the layout the shared sheet actually has)."""

WORKBOOK_CONFIG = """sources:
  schedule:
    path: ./data/schedule.xlsx
    sheet: 입력
  contacts:
    path: ./data/schedule.xlsx
    sheet: 위촉문자
  settings:
    path: ./data/schedule.xlsx
    sheet: 설정
output_path: ./public/data.json
timezone: Asia/Seoul
"""


def _write_workbook(path: Path) -> None:
    schedule = [
        SCHEDULE_HEADER,
        [pd.Timestamp("2025-05-07"), "굿리치", None, "3-1차", "GP 오픈 예정 (10:00)", None],
        [45781, "굿리치", None, "3-1차", "자격추가/전산승인마감", None],
        ["5/2", "위촉", "한화생명", "3-1차", "서류 마감 (생명보험협회 등록일 4/28)", pd.Timestamp("2025-05-05")],
        ["2025. 5. 1", "위촉", "삼성화재", "3-1,3-2차", "원본 발송", None],
        ["2025-05-21", "굿리치", None, 3, "GP 오픈 예정 (14:00)", None],
        ["2025-05-20", "굿리치", None, "3 차", "자격추가/전산승인마감", None],
    ]
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(schedule).to_excel(writer, sheet_name="입력", header=False, index=False)
        pd.DataFrame([["회사", "위촉방법", "담당자", "연락처"]] + CONTACT_CELLS).to_excel(
            writer, sheet_name="위촉문자", header=False, index=False
        )
        pd.DataFrame([["항목", "값"]] + SETTINGS_CELLS).to_excel(
            writer, sheet_name="설정", header=False, index=False
        )


def test_workbook_end_to_end(temp_workdir: Path):
    _write_workbook(temp_workdir / "data" / "schedule.xlsx")
    cfg_path = temp_workdir / "config" / "planner.yml"
    cfg_path.write_text(WORKBOOK_CONFIG, encoding="utf-8")
    cfg = load_config(cfg_path)

    result = build_dataset(cfg, today=date(2025, 4, 1), error_log=ErrorLogBuffer())
    schedules = result.dataset.schedules
    assert [r.round_key for r in schedules] == ["3-1", "3"]

    first = schedules[0]
    assert first.open_date == date(2025, 5, 7)
    assert first.submission_deadline == date(2025, 5, 4)
    assert [o.organization_name for o in first.organizations] == ["한화생명", "삼성화재"]
    assert first.organizations[0].upload_date == date(2025, 5, 5)
    assert first.organizations[0].contact_person == "김담당 (010-1111-2222)"

    # 숫자 차수 3 과 '3 차' 는 같은 차수
    third = schedules[1]
    assert third.open_date == date(2025, 5, 21)
    assert third.submission_deadline == date(2025, 5, 20)
    assert third.organizations == ()

    assert result.total_events == 6
    assert result.issues == 1  # 삼성화재 주소 미입력

    feasibility = evaluate(
        CandidateState(desired_date=date(2025, 5, 1), clearance_completed=True),
        schedules,
        today=date(2025, 4, 1),
    )
    assert feasibility.selected_round == "3-1"
    assert feasibility.clearance_deadline == date(2025, 4, 17)
    assert feasibility.is_possible


def test_workbook_via_cli(temp_workdir: Path, capsys):
    _write_workbook(temp_workdir / "data" / "schedule.xlsx")
    (temp_workdir / "config" / "planner.yml").write_text(WORKBOOK_CONFIG, encoding="utf-8")

    code = cli_main(["--today", "2025-04-01"])
    assert code == 0
    out = capsys.readouterr().out
    assert "SUMMARY rounds=2 companies=2 events=6 issues=1" in out

    data = json.loads((temp_workdir / "public" / "data.json").read_text(encoding="utf-8"))
    assert data["requiredDocuments"] == "신분증 사본, 통장 사본"
    assert [r["company"] for r in data["recipients"]] == ["한화", "삼성화재"]
    assert data["recipients"][1]["address"].startswith("주소 미입력")
    assert data["schedules"][0]["gpOpenDate"] == "5/7(수)"
    assert data["schedules"][0]["deadline"] == "5/4(일)"
