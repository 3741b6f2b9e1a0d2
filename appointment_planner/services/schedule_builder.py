from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from ..models.classification import RowClassification, SourceType
from ..models.config_models import AttachmentMode, BuildOptions, DEFAULT_OPTIONS, MilestoneConflict
from ..models.row_data import RawRow
from ..models.schedule import OrganizationEntry, RoundRecord
from ..models.settings import ContactInfo
from .date_normalizer import find_registration_date, normalize_date
from .round_keys import normalize_and_split, primary_round_key
from .row_classifier import classify_rows

"""Round registry construction.

Two passes over the full row set, since a round's deadline row may come
before or after its open-announcement row:

1. discovery: internal rows register their primary round key and feed the
   open date / submission deadline of that key
2. (optional) filter: keep keys whose open date or deadline is the filter day
3. attachment: organization rows are matched against every retained key by
   value (round key -> entries multimap); one row may join several rounds

Rows whose date cannot be parsed contribute nothing and never abort a build.
"""

__all__ = [
    "build_schedule",
]

logger = logging.getLogger(__name__)


@dataclass
class _RoundDraft:
    round_key: str
    open_date: date | None = None
    submission_deadline: date | None = None
    open_content: str = ""


def _should_write(current: date | None, policy: MilestoneConflict) -> bool:
    return current is None or policy is MilestoneConflict.LAST


def _discover_rounds(
    rows: Sequence[RawRow],
    classifications: Sequence[RowClassification],
    policy: MilestoneConflict,
    today: date | None,
) -> dict[str, _RoundDraft]:
    drafts: dict[str, _RoundDraft] = {}
    for row, tag in zip(rows, classifications, strict=True):
        if tag.source_type is not SourceType.INTERNAL:
            continue
        row_date = normalize_date(row.date, today=today)
        if row_date is None:
            continue
        key = primary_round_key(row.round_label)
        if not key:
            continue
        draft = drafts.setdefault(key, _RoundDraft(round_key=key))
        if tag.is_open_announcement and _should_write(draft.open_date, policy):
            draft.open_date = row_date
            draft.open_content = row.content
        if tag.is_submission_deadline and _should_write(draft.submission_deadline, policy):
            draft.submission_deadline = row_date
    return drafts


def _is_attachable(row: RawRow, tag: RowClassification, mode: AttachmentMode) -> bool:
    if not row.company:
        return False
    if mode is AttachmentMode.APPOINTMENT_MARKER:
        return tag.is_appointment
    return tag.is_organization_submission


def _attach_organizations(
    rows: Sequence[RawRow],
    classifications: Sequence[RowClassification],
    round_keys: Sequence[str],
    contact_map: Mapping[str, ContactInfo],
    options: BuildOptions,
    today: date | None,
) -> dict[str, list[OrganizationEntry]]:
    attached: dict[str, list[OrganizationEntry]] = {key: [] for key in round_keys}
    for row, tag in zip(rows, classifications, strict=True):
        if not _is_attachable(row, tag, options.attachment_mode):
            continue
        segments = set(normalize_and_split(row.round_label))
        if not segments:
            continue
        deadline = normalize_date(row.date, today=today)
        if row.date is not None and deadline is None:
            continue
        contact = contact_map.get(row.company.strip().lower(), ContactInfo())
        upload = normalize_date(row.secondary_date, today=today)
        registration = find_registration_date(
            row.content, options.markers.registration, today=today
        )
        # no break: a row listing several rounds joins each of them
        for key in round_keys:
            if key not in segments:
                continue
            attached[key].append(
                OrganizationEntry(
                    organization_name=row.company,
                    round_key=key,
                    submission_deadline=deadline,
                    upload_date=upload,
                    contact_memo=contact.memo,
                    contact_person=contact.manager,
                    registration_date=registration,
                )
            )
    return attached


def _sort_key(record: RoundRecord) -> tuple[int, date]:
    anchor = record.sort_date
    if anchor is None:
        return (1, date.max)
    return (0, anchor)


def build_schedule(
    rows: Sequence[RawRow],
    contact_map: Mapping[str, ContactInfo] | None = None,
    *,
    classifications: Sequence[RowClassification] | None = None,
    filter_date: date | None = None,
    options: BuildOptions = DEFAULT_OPTIONS,
    today: date | None = None,
) -> list[RoundRecord]:
    """Build the round registry from schedule rows.

    Args:
        rows: Schedule rows (header stripped)
        contact_map: Lowercased company -> ContactInfo (missing -> empty strings)
        classifications: Precomputed tags aligned with ``rows`` (computed when None)
        filter_date: Keep only rounds opening or closing on this day
        options: Classifier markers, attachment mode, milestone conflict policy
        today: Reference date for year-less dates

    Returns:
        RoundRecords sorted by open date (else deadline); undated rounds last,
        ties in discovery order
    """
    if classifications is None:
        classifications = classify_rows(rows, options.markers)
    drafts = _discover_rounds(rows, classifications, options.milestone_conflict, today)

    if filter_date is not None:
        drafts = {
            key: d
            for key, d in drafts.items()
            if filter_date in (d.open_date, d.submission_deadline)
        }
        if not drafts:
            logger.info(f"no rounds open or close on {filter_date.isoformat()}")
            return []

    attached = _attach_organizations(
        rows, classifications, list(drafts), contact_map or {}, options, today
    )
    records = [
        RoundRecord(
            round_key=key,
            open_date=d.open_date,
            submission_deadline=d.submission_deadline,
            organizations=tuple(attached[key]),
            open_content=d.open_content,
        )
        for key, d in drafts.items()
    ]
    logger.debug(f"schedule built: rounds={len(records)}")
    return sorted(records, key=_sort_key)
