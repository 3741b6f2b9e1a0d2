# Shared pytest fixtures
from __future__ import annotations

import csv
import tempfile
from datetime import date
from pathlib import Path

import pytest

from appointment_planner.logging.init import reset_logging
from appointment_planner.models.row_data import RawRow, rows_from_cells

# 테스트 기준일 (M/D 텍스트의 연도 결정)
TODAY = date(2025, 4, 1)

SCHEDULE_HEADER = ["날짜", "구분", "회사", "차수", "내용", "GP업로드"]

SCHEDULE_CELLS = [
    ["2025-05-07", "굿리치", "", "3-1차", "GP 오픈 예정 (10:00)", ""],
    ["2025. 5. 4", "굿리치", "", "3-1차", "자격추가/전산승인마감", ""],
    ["5/2", "위촉", "한화생명", "3-1차", "서류 마감 (생명보험협회 등록일 4/28)", "5/5"],
    ["2025/05/01", "위촉", "삼성화재", "3-1,3-2차", "원본 발송", ""],
    ["2025-05-21", "굿리치", "", "3-2 차", "GP 오픈 예정 (14:00)", ""],
    ["5/7", "세종", "", "", "세종 등록교육", ""],
    ["not a date", "위촉", "흥국생명", "3-1차", "날짜 오류 행", ""],
]

CONTACT_CELLS = [
    ["한화생명", "온라인 위촉", "김담당", "010-1111-2222"],
    ["삼성화재", "방문 위촉", "이담당", ""],
]

SETTINGS_CELLS = [
    ["위촉필요서류", "신분증 사본, 통장 사본"],
    ["체크리스트", "위촉서류 제출"],
    ["수신", ""],
    ["한화", "서울특별시 영등포구 63로 50"],
]


@pytest.fixture(autouse=True)
def _reset_logger():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        for key in ("GOOGLE_SHEETS_SPREADSHEET_ID", "GOOGLE_SHEET_ID", "FILTER_DATE"):
            monkeypatch.delenv(key, raising=False)
        yield p


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture()
def sample_csv_sources(temp_workdir: Path) -> dict[str, Path]:
    data = temp_workdir / "data"
    return {
        "schedule": write_csv(data / "schedule.csv", SCHEDULE_HEADER, SCHEDULE_CELLS),
        "contacts": write_csv(data / "contacts.csv", ["회사", "위촉방법", "담당자", "연락처"], CONTACT_CELLS),
        "settings": write_csv(data / "settings.csv", ["항목", "값"], SETTINGS_CELLS),
    }


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sources:
  schedule:
    path: ./data/schedule.csv
  contacts:
    path: ./data/contacts.csv
  settings:
    path: ./data/settings.csv
output_path: ./public/data.json
request_timeout_seconds: 5
timezone: UTC
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "planner.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def schedule_rows() -> list[RawRow]:
    return rows_from_cells(SCHEDULE_CELLS)


def make_row(date_cell, category="", company="", round_label="", content="", secondary=None, row_number=1) -> RawRow:
    return RawRow.from_cells([date_cell, category, company, round_label, content, secondary], row_number)
