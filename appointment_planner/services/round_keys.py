from __future__ import annotations

import re
from typing import Any

"""Round key normalization.

Round labels in the sheet are free text: '9-4차', ' 3-1 차', '1-1,1-2차',
'11-1/11-2치', '1-1.1-2차'. A round key is the label with all whitespace
removed and the trailing ordinal suffix (차/치/챠, typos included) stripped.
Suffix stripping is anchored at the end only: inside a multi-value field the
suffix may sit between segments before splitting.
"""

__all__ = [
    "ROUND_SUFFIXES",
    "normalize_round_key",
    "normalize_and_split",
    "primary_round_key",
    "matches_round",
]

ROUND_SUFFIXES = "차치챠"

_WHITESPACE = re.compile(r"\s+")
_TRAILING_SUFFIX = re.compile(f"[{ROUND_SUFFIXES}]+$")
_SEGMENT_SEPARATORS = re.compile(r"[,/.]")


def normalize_round_key(raw_label: Any) -> str:
    """'9-4차' -> '9-4'. Idempotent."""
    if raw_label is None:
        return ""
    text = _WHITESPACE.sub("", str(raw_label).strip())
    return _TRAILING_SUFFIX.sub("", text)


def normalize_and_split(raw_field: Any) -> tuple[str, ...]:
    """Split a round field on ',', '/' or '.' into distinct normalized keys.

    Order of first appearance is kept; empty segments are dropped.
    '11-1,11-2차' -> ('11-1', '11-2')
    """
    if raw_field is None:
        return ()
    keys = (normalize_round_key(segment) for segment in _SEGMENT_SEPARATORS.split(str(raw_field)))
    return tuple(dict.fromkeys(k for k in keys if k))


def primary_round_key(raw_field: Any) -> str:
    """Key of the first segment only ('' when that segment is empty).

    Open-announcement and deadline rows name one canonical round even when
    their field lists several.
    """
    if raw_field is None:
        return ""
    first = _SEGMENT_SEPARATORS.split(str(raw_field).strip(), maxsplit=1)[0]
    return normalize_round_key(first)


def matches_round(target_key: Any, raw_field: Any) -> bool:
    """True when ``target_key`` equals any normalized segment of ``raw_field``."""
    key = normalize_round_key(target_key)
    if not key or not raw_field:
        return False
    return key in normalize_and_split(raw_field)
