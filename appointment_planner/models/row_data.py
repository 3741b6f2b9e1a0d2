from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

"""RawRow model for the appointment schedule sheet.

A RawRow is one data row of the schedule sheet (header already stripped) with
its fixed positional columns:

    0=date, 1=category, 2=company, 3=round, 4=content, 5=secondary date (GP upload)

Date cells stay untyped (number | text | native date) because the sheet mixes
spreadsheet serials, native dates and several text layouts; they are only
interpreted by the date normalizer. Text cells are stripped strings.
"""

__all__ = [
    "RawRow",
    "rows_from_cells",
    "is_blank_cell",
    "cell_text",
]

DATE_COL = 0
CATEGORY_COL = 1
COMPANY_COL = 2
ROUND_COL = 3
CONTENT_COL = 4
SECONDARY_DATE_COL = 5
_COLUMN_COUNT = 6


def is_blank_cell(value: Any) -> bool:
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value: Any) -> str:
    """Render a cell as stripped text ('' for blanks).

    Whole floats come back as integers: a numeric round column read from a
    workbook is float64 (``3.0``) and must not grow a '.0' segment, since '.'
    is a round separator.
    """
    if is_blank_cell(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


@dataclass(frozen=True)
class RawRow:
    """One schedule sheet row. Immutable once read."""
    row_number: int  # 1-based data row number (header excluded)
    date: Any  # untyped date cell, None when blank
    category: str
    company: str
    round_label: str  # raw round field, possibly multi-valued ("1-1,1-2차")
    content: str
    secondary_date: Any = None  # GP upload date cell

    @classmethod
    def from_cells(cls, cells: Sequence[Any], row_number: int) -> RawRow:
        padded = list(cells[:_COLUMN_COUNT]) + [None] * max(0, _COLUMN_COUNT - len(cells))
        date_cell = padded[DATE_COL]
        secondary = padded[SECONDARY_DATE_COL]
        return cls(
            row_number=row_number,
            date=None if is_blank_cell(date_cell) else date_cell,
            category=cell_text(padded[CATEGORY_COL]),
            company=cell_text(padded[COMPANY_COL]),
            round_label=cell_text(padded[ROUND_COL]),
            content=cell_text(padded[CONTENT_COL]),
            secondary_date=None if is_blank_cell(secondary) else secondary,
        )


def rows_from_cells(rows: Iterable[Sequence[Any]]) -> list[RawRow]:
    return [RawRow.from_cells(cells, row_number=i) for i, cells in enumerate(rows, start=1)]
