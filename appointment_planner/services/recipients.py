from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.schedule import RoundRecord
from ..models.settings import PLACEHOLDER_ADDRESS, Recipient

__all__ = [
    "merge_recipients",
    "missing_addresses",
]


def _known(company: str, recipients: Sequence[Recipient]) -> bool:
    # 시트 표기가 약칭/정식명칭으로 섞여 있어 양방향 포함 관계로 비교
    return any(r.company in company or company in r.company for r in recipients)


def merge_recipients(
    recipients: Iterable[Recipient], schedules: Iterable[RoundRecord]
) -> tuple[Recipient, ...]:
    """Sheet recipients plus a placeholder entry per unknown registry company.

    Companies are added in registry order, once each.
    """
    merged = list(recipients)
    sheet_recipients = tuple(merged)
    seen: set[str] = set()
    for record in schedules:
        for entry in record.organizations:
            company = entry.organization_name
            if company in seen:
                continue
            seen.add(company)
            if not _known(company, sheet_recipients):
                merged.append(Recipient(company=company, address=PLACEHOLDER_ADDRESS))
    return tuple(merged)


def missing_addresses(recipients: Iterable[Recipient]) -> list[Recipient]:
    return [r for r in recipients if not r.has_address]
