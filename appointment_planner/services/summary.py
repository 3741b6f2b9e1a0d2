from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY rounds={n} companies={n} events={n} issues={n} elapsed_sec={x}
"""

__all__ = [
    "render_summary_line",
]


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from appointment_planner.models.processing_result import PlannerDataset
        >>> from appointment_planner.models.settings import AdminSettings
        >>> t = datetime(2025, 5, 1, tzinfo=timezone.utc)
        >>> empty = PlannerDataset(AdminSettings("", ()), (), ())
        >>> render_summary_line(ProcessingResult(empty, 0, 0, t, t, 2.0))
        'SUMMARY rounds=0 companies=0 events=0 issues=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY rounds={result.total_rounds} "
        f"companies={result.total_companies} "
        f"events={result.total_events} "
        f"issues={result.issues} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
