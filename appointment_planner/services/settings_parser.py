from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..models.row_data import cell_text
from ..models.settings import AdminSettings, ChecklistItem, ContactInfo, Recipient

"""Parsers for the contact sheet (위촉문자) and the settings sheet (설정).

Contact sheet columns: 0=company, 1=memo, 2=contact name, 3=contact phone.
Settings sheet columns: 0=key, 1=value. The key '수신' opens the recipient
section; inside it each key/value pair is (organization, address) until
'위촉필요서류' or '체크리스트' closes it.
"""

__all__ = [
    "GUIDANCE_KEY",
    "CHECKLIST_KEY",
    "RECIPIENT_SECTION_KEY",
    "DEFAULT_GUIDANCE",
    "DEFAULT_CHECKLIST",
    "build_contact_map",
    "parse_admin_settings",
]

GUIDANCE_KEY = "위촉필요서류"
CHECKLIST_KEY = "체크리스트"
RECIPIENT_SECTION_KEY = "수신"
_SECTION_END_KEYS = frozenset({GUIDANCE_KEY, CHECKLIST_KEY})

DEFAULT_GUIDANCE = "환영합니다! 굿리치 전문가로의 첫 걸음을 응원합니다."
DEFAULT_CHECKLIST = (
    ChecklistItem(item_id="1", text="위촉서류 제출"),
    ChecklistItem(item_id="2", text="굿리치 앱 설치 및 프로필 설정"),
)


def _cell(row: Sequence[Any], index: int) -> str:
    return cell_text(row[index]) if len(row) > index else ""


def build_contact_map(rows: Iterable[Sequence[Any]] | None) -> dict[str, ContactInfo]:
    """Company (lowercased, trimmed) -> ContactInfo. Later rows win."""
    contacts: dict[str, ContactInfo] = {}
    if not rows:
        return contacts
    for row in rows:
        company = _cell(row, 0).lower()
        if not company:
            continue
        name = _cell(row, 2)
        phone = _cell(row, 3)
        manager = f"{name} ({phone})" if name and phone else name
        contacts[company] = ContactInfo(memo=_cell(row, 1), manager=manager)
    return contacts


def parse_admin_settings(rows: Iterable[Sequence[Any]] | None) -> AdminSettings:
    """Guidance text, checklist and recipient addresses from the settings sheet.

    Defaults apply when the sheet is missing or yields no guidance / checklist.
    """
    if not rows:
        return AdminSettings(guidance=DEFAULT_GUIDANCE, checklist=DEFAULT_CHECKLIST)

    guidance = ""
    checklist: list[ChecklistItem] = []
    recipients: list[Recipient] = []
    in_recipients = False

    for row in rows:
        key = _cell(row, 0).replace("`", "")
        value = _cell(row, 1)
        if not key:
            continue
        if key == RECIPIENT_SECTION_KEY:
            in_recipients = True
            continue
        if in_recipients:
            if key in _SECTION_END_KEYS:
                in_recipients = False
            else:
                if value:
                    recipients.append(Recipient(company=key, address=value))
                continue
        if not value:
            continue
        if key == GUIDANCE_KEY:
            guidance = value
        elif key == CHECKLIST_KEY:
            checklist.append(ChecklistItem(item_id=str(len(checklist) + 1), text=value))

    return AdminSettings(
        guidance=guidance or DEFAULT_GUIDANCE,
        checklist=tuple(checklist) if checklist else DEFAULT_CHECKLIST,
        recipients=tuple(recipients),
    )
