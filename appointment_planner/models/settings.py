from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Settings sheet and contact sheet models."""

__all__ = [
    "PLACEHOLDER_ADDRESS",
    "ContactInfo",
    "ChecklistItem",
    "Recipient",
    "AdminSettings",
]

PLACEHOLDER_ADDRESS = "주소 미입력 - 구글시트 수신처 탭에서 주소를 입력해주세요"
_PLACEHOLDER_MARK = "주소 미입력"


@dataclass(frozen=True)
class ContactInfo:
    memo: str = ""  # 위촉 방법 안내 문구
    manager: str = ""  # "name (phone)"


@dataclass(frozen=True)
class ChecklistItem:
    item_id: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.item_id, "text": self.text}


@dataclass(frozen=True)
class Recipient:
    """Mailing address of an organization (original documents go here)."""
    company: str
    address: str

    @property
    def has_address(self) -> bool:
        return bool(self.address) and _PLACEHOLDER_MARK not in self.address

    def to_dict(self) -> dict[str, Any]:
        return {"company": self.company, "address": self.address}


@dataclass(frozen=True)
class AdminSettings:
    guidance: str
    checklist: tuple[ChecklistItem, ...]
    recipients: tuple[Recipient, ...] = ()
