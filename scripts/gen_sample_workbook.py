#!/usr/bin/env python3
"""Sample workbook generation script.

Generates a schedule workbook with the three tabs the planner reads:
- 입력: schedule rows (date / category / company / round / content / upload date)
- 위촉문자: contact rows (company / memo / name / phone)
- 설정: key/value settings rows (guidance, checklist, 수신 addresses)

Row 1 of every sheet is a header row. Each round gets an internal
open-announcement row, an internal deadline row and a few organization rows.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

ORGANIZATIONS = ["한화생명", "삼성화재", "DB손해보험", "KB손해보험", "메리츠화재", "흥국생명", "동양생명"]
SCHEDULE_HEADER = ["날짜", "구분", "회사", "차수", "내용", "GP업로드"]
CONTACT_HEADER = ["회사", "위촉방법", "담당자", "연락처"]
SETTINGS_HEADER = ["항목", "값"]


def generate_schedule_rows(
    start: date, rounds: int, orgs_per_round: int, seed: int = 42
) -> list[list[Any]]:
    """Two rounds per month starting at ``start``; dates as ``YYYY-MM-DD`` text.

    Args:
        start: Open date of the first round
        rounds: Number of rounds to generate
        orgs_per_round: Organization rows per round (capped at the org list)
        seed: Random seed for reproducible data

    Returns:
        Schedule rows without the header
    """
    rng = np.random.default_rng(seed)
    rows: list[list[Any]] = []
    for i in range(rounds):
        open_date = start + timedelta(days=14 * i)
        deadline = open_date - timedelta(days=3)
        key = f"{open_date.month}-{1 + (i % 2)}"
        rows.append([open_date.isoformat(), "굿리치", "", f"{key}차", "GP 오픈 예정 (10:00)", ""])
        rows.append([deadline.isoformat(), "굿리치", "", f"{key}차", "자격추가/전산승인마감", ""])
        picked = rng.choice(ORGANIZATIONS, size=min(orgs_per_round, len(ORGANIZATIONS)), replace=False)
        for org in picked.tolist():
            org_deadline = deadline - timedelta(days=int(rng.integers(1, 5)))
            registration = org_deadline - timedelta(days=2)
            rows.append([
                org_deadline.isoformat(),
                "위촉",
                org,
                f"{key}차",
                f"서류 마감 (생명보험협회 등록일 {registration.month}/{registration.day})",
                (deadline + timedelta(days=1)).isoformat(),
            ])
    return rows


def generate_contact_rows() -> list[list[Any]]:
    return [
        [org, f"{org} 온라인 위촉", f"담당{i + 1}", f"010-0000-{i + 1:04d}"]
        for i, org in enumerate(ORGANIZATIONS)
    ]


def generate_settings_rows() -> list[list[Any]]:
    rows: list[list[Any]] = [
        ["위촉필요서류", "신분증 사본, 통장 사본, 등본"],
        ["체크리스트", "위촉서류 제출"],
        ["체크리스트", "굿리치 앱 설치 및 프로필 설정"],
        ["수신", ""],
    ]
    # 마지막 회사는 주소 미입력 상태로 둔다
    for org in ORGANIZATIONS[:-1]:
        rows.append([org, f"서울특별시 중구 세종대로 {len(org) * 10}"])
    return rows


def create_workbook(output_path: Path, start: date, rounds: int, orgs_per_round: int, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheets = {
        "입력": [SCHEDULE_HEADER] + generate_schedule_rows(start, rounds, orgs_per_round, seed),
        "위촉문자": [CONTACT_HEADER] + generate_contact_rows(),
        "설정": [SETTINGS_HEADER] + generate_settings_rows(),
    }
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for sheet_name, sheet_rows in sheets.items():
            pd.DataFrame(sheet_rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Rounds: {rounds} (first opens {start.isoformat()})")
    print(f"  Schedule rows: {len(sheets['입력']) - 1}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample schedule workbook")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(), help="First open date (YYYY-MM-DD)")
    parser.add_argument("--rounds", type=int, default=6, help="Number of rounds")
    parser.add_argument("--orgs", type=int, default=3, help="Organization rows per round")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    if args.rounds <= 0 or args.orgs <= 0:
        print("Error: --rounds and --orgs must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() != ".xlsx":
        print(f"Error: output must be .xlsx: {args.output}", file=sys.stderr)
        return 1

    create_workbook(args.output, args.start, args.rounds, args.orgs, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
