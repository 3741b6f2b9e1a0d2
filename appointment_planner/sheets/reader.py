from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

import pandas as pd
import requests

from ..models.config_models import SourceSpec
from ..models.row_data import is_blank_cell

"""Tabular source reader.

Every source is returned as ``list[list[Any]]`` with the header row (first
row) stripped and fully blank rows dropped:

- ``.csv``: every cell as text ('' for blanks)
- ``.xlsx``: native cell types kept (Timestamp, int, float, str; None for
  blanks) so dates and serial numbers reach the date normalizer untouched
- Google spreadsheet tab: the sheet's CSV export, fetched over HTTP

Failing to obtain a source at all is the only fatal error of a load and is
raised as SourceUnavailableError.
"""

__all__ = [
    "SourceUnavailableError",
    "GVIZ_CSV_URL",
    "read_csv_rows",
    "read_workbook_rows",
    "fetch_sheet_rows",
    "load_source",
]

logger = logging.getLogger(__name__)

GVIZ_CSV_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/gviz/tq?tqx=out:csv&sheet={sheet}"


class SourceUnavailableError(Exception):
    """Raised when a row source cannot be read or fetched."""


def _frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    if df.empty:
        return []
    cleaned = df.astype(object).where(pd.notna(df), None)
    rows: list[list[Any]] = []
    for values in cleaned.iloc[1:].values.tolist():  # 1行目はヘッダ
        if all(is_blank_cell(v) for v in values):
            continue
        rows.append(values)
    return rows


def _parse_csv_text(text: str) -> list[list[Any]]:
    if not text.strip():
        return []
    df = pd.read_csv(io.StringIO(text), header=None, dtype=str, keep_default_na=False)
    return _frame_to_rows(df)


def read_csv_rows(path: Path) -> list[list[Any]]:
    if not path.exists():
        raise SourceUnavailableError(f"source file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
        return _parse_csv_text(text)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise SourceUnavailableError(f"cannot read {path}: {e}") from e


def read_workbook_rows(path: Path, sheet: str | None = None) -> list[list[Any]]:
    """Read one worksheet (first sheet when ``sheet`` is None)."""
    if not path.exists():
        raise SourceUnavailableError(f"source file not found: {path}")
    try:
        df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0, header=None)
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
        # ValueError: 시트 없음 / 형식 불일치
        raise SourceUnavailableError(f"cannot read {path} [{sheet or 0}]: {e}") from e
    return _frame_to_rows(df)


def fetch_sheet_rows(
    spreadsheet_id: str,
    sheet: str,
    *,
    timeout_seconds: float = 30.0,
    session: requests.Session | None = None,
) -> list[list[Any]]:
    """Fetch one tab of a published Google spreadsheet as rows."""
    url = GVIZ_CSV_URL.format(spreadsheet_id=spreadsheet_id, sheet=quote(sheet))
    http = session or requests
    try:
        response = http.get(url, timeout=timeout_seconds)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailableError(f"failed to fetch sheet '{sheet}': {e}") from e
    response.encoding = "utf-8"
    try:
        return _parse_csv_text(response.text)
    except pd.errors.ParserError as e:
        raise SourceUnavailableError(f"sheet '{sheet}' is not valid CSV: {e}") from e


def load_source(
    spec: SourceSpec,
    *,
    spreadsheet_id: str | None = None,
    timeout_seconds: float = 30.0,
    session: requests.Session | None = None,
) -> list[list[Any]]:
    """Load one configured source (local file first, then spreadsheet tab)."""
    if spec.path:
        path = Path(spec.path)
        if path.suffix.lower() in (".xlsx", ".xlsm"):
            rows = read_workbook_rows(path, spec.sheet)
        else:
            rows = read_csv_rows(path)
    elif spec.sheet and spreadsheet_id:
        rows = fetch_sheet_rows(
            spreadsheet_id, spec.sheet, timeout_seconds=timeout_seconds, session=session
        )
    else:
        raise SourceUnavailableError(
            f"source '{spec.name}' has neither a path nor a sheet with a spreadsheet id"
        )
    logger.debug(f"loaded {spec.name}: {len(rows)} rows from {spec.label}")
    return rows
