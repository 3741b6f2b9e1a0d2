from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for data issue logging.

Row-level data problems never abort a load; they are collected as
ErrorRecords and written as JSON Lines by ``logging.error_log.ErrorLogBuffer``.
row=-1 is accepted for source-level issues where no row applies.
"""

__all__ = [
    "ErrorRecord",
    "UNPARSEABLE_DATE",
    "ADDRESS_MISSING",
]

UNPARSEABLE_DATE = "UNPARSEABLE_DATE"
ADDRESS_MISSING = "ADDRESS_MISSING"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured data issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Logical source name (schedule / contacts / settings)
        sheet: Sheet name or file name the row came from
        row: Data row number (1-based). -1 when the issue is not row-bound
        error_type: Issue classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    sheet: str
    row: int  # 不明な場合 -1
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(source: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
