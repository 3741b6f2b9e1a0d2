from __future__ import annotations

from datetime import date

"""Display formatting for canonical dates.

Every output string in the dataset / feasibility payloads is produced here so
that the consuming layer sees one consistent rendering per format:

- ISO: ``2025-05-07``
- weekday short: ``5/7(수)`` (round registry columns)
- Korean long: ``2025년 05월 07일 (수)`` (feasibility messages)
"""

__all__ = [
    "WEEKDAY_LABELS",
    "format_iso",
    "format_with_weekday",
    "format_korean_long",
    "format_korean_date",
    "format_korean_month_day",
]

# date.weekday(): 월요일=0
WEEKDAY_LABELS = ("월", "화", "수", "목", "금", "토", "일")


def format_iso(value: date | None) -> str:
    if value is None:
        return ""
    return value.isoformat()


def format_with_weekday(value: date | None) -> str:
    if value is None:
        return ""
    return f"{value.month}/{value.day}({WEEKDAY_LABELS[value.weekday()]})"


def format_korean_long(value: date | None) -> str:
    if value is None:
        return ""
    return f"{format_korean_date(value)} ({WEEKDAY_LABELS[value.weekday()]})"


def format_korean_date(value: date) -> str:
    return f"{value.year}년 {value.month:02d}월 {value.day:02d}일"


def format_korean_month_day(value: date) -> str:
    return f"{value.month:02d}월 {value.day:02d}일"
