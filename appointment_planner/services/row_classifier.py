from __future__ import annotations

from collections.abc import Iterable

from ..models.classification import MilestoneKind, RowClassification, SourceType
from ..models.config_models import ClassifierMarkers
from ..models.row_data import RawRow

"""Row classification (source type + milestone kind).

Pure text inspection of category / content / company; see ClassifierMarkers
for the tokens. Rules:

- source: internal marker in category -> INTERNAL, else either session marker
  -> EXTERNAL_SESSION, else ORGANIZATION
- open announcement / submission deadline: marker phrase in content
- organization submission: ORGANIZATION source with a company name
"""

__all__ = [
    "DEFAULT_MARKERS",
    "classify_row",
    "classify",
    "classify_rows",
]

DEFAULT_MARKERS = ClassifierMarkers()


def _source_type(category: str, markers: ClassifierMarkers) -> SourceType:
    if markers.internal and markers.internal in category:
        return SourceType.INTERNAL
    if any(token and token in category for token in markers.external_session):
        return SourceType.EXTERNAL_SESSION
    return SourceType.ORGANIZATION


def classify_row(
    category: str,
    content: str,
    company: str = "",
    *,
    markers: ClassifierMarkers = DEFAULT_MARKERS,
) -> RowClassification:
    category = category or ""
    content = content or ""
    source_type = _source_type(category, markers)
    is_open = bool(markers.open_announcement) and markers.open_announcement in content
    is_deadline = bool(markers.submission_deadline) and markers.submission_deadline in content
    is_org_submission = source_type is SourceType.ORGANIZATION and bool((company or "").strip())

    if is_open:
        kind = MilestoneKind.OPEN_ANNOUNCEMENT
    elif is_deadline:
        kind = MilestoneKind.SUBMISSION_DEADLINE
    elif is_org_submission:
        kind = MilestoneKind.ORGANIZATION_SUBMISSION
    else:
        kind = MilestoneKind.OTHER

    return RowClassification(
        source_type=source_type,
        milestone_kind=kind,
        is_open_announcement=is_open,
        is_submission_deadline=is_deadline,
        is_organization_submission=is_org_submission,
        is_appointment=bool(markers.appointment) and markers.appointment in category,
    )


def classify(row: RawRow, markers: ClassifierMarkers = DEFAULT_MARKERS) -> RowClassification:
    return classify_row(row.category, row.content, row.company, markers=markers)


def classify_rows(
    rows: Iterable[RawRow], markers: ClassifierMarkers = DEFAULT_MARKERS
) -> list[RowClassification]:
    return [classify(row, markers) for row in rows]
