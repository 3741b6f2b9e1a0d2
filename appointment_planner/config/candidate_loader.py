from __future__ import annotations

from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.candidate import CERTIFICATION_LABELS, CandidateState, TrainingStatus
from ..services.date_normalizer import normalize_date
from .loader import ConfigError

"""Candidate file loader (YAML) for the CLI feasibility check.

Example::

    name: 홍길동
    desired_date: 2025-05-07
    clearance_completed: false
    notice_sent_date: 2025-04-20
    certifications: [life, damage]
    training_status: none
    insurance_checked: true

Dates may be YAML dates or any text the date normalizer accepts.
"""

__all__ = [
    "CANDIDATE_SCHEMA",
    "candidate_from_mapping",
    "load_candidate",
]

# date fields are left untyped: YAML hands back date objects or strings
CANDIDATE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["desired_date"],
    "properties": {
        "name": {"type": "string"},
        "desired_date": {},
        "clearance_completed": {"type": "boolean"},
        "notice_sent_date": {},
        "certifications": {
            "type": "array",
            "items": {"enum": list(CERTIFICATION_LABELS)},
            "uniqueItems": True,
        },
        "training_status": {"enum": [s.value for s in TrainingStatus]},
        "insurance_checked": {"type": "boolean"},
    },
}


def _date_field(data: dict[str, Any], key: str, *, required: bool = False):
    raw = data.get(key)
    if raw is None or raw == "":
        if required:
            raise ConfigError(f"candidate: {key} is required")
        return None
    parsed = normalize_date(raw)
    if parsed is None:
        raise ConfigError(f"candidate: unparseable {key}: {raw!r}")
    return parsed


def candidate_from_mapping(data: dict[str, Any]) -> CandidateState:
    try:
        jsonschema.validate(data, CANDIDATE_SCHEMA)
    except ValidationError as e:
        raise ConfigError(f"candidate validation failed: {e.message}") from e
    return CandidateState(
        desired_date=_date_field(data, "desired_date", required=True),
        clearance_completed=bool(data.get("clearance_completed", False)),
        notice_sent_date=_date_field(data, "notice_sent_date"),
        certifications=frozenset(data.get("certifications") or ()),
        training_status=TrainingStatus(data.get("training_status", "none")),
        insurance_checked=bool(data.get("insurance_checked", False)),
        name=data.get("name", ""),
    )


def load_candidate(path: Path) -> CandidateState:
    if not path.exists():
        raise ConfigError(f"candidate file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("candidate file must be a mapping")
    return candidate_from_mapping(data)
