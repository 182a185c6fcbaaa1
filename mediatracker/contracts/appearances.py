"""Data file contracts.

`appearances.json` is hand-curated as well as machine-written, so it is
validated on every load. This module defines:
- JSON Schemas for the appearances collection and the listening tour file
- Helpers returning human-readable validation errors
"""

from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator


_DATE = {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}"}

APPEARANCES_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["appearances"],
    "properties": {
        "lastUpdated": {"type": ["string", "null"]},
        "officeStartDate": _DATE,
        "appointmentDate": _DATE,
        "appearances": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "date", "outlet"],
                "properties": {
                    "id": {"type": "integer"},
                    "date": _DATE,
                    "outlet": {"type": "string"},
                    "type": {"type": "string"},
                    "topic": {"type": "string"},
                    "quote": {"type": "string"},
                    "icon": {"type": "string"},
                    "url": {"type": ["string", "null"]},
                    "needsReview": {"type": "boolean"},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

TOUR_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["totalDistricts", "visits", "upcoming", "allDistricts"],
    "properties": {
        "totalDistricts": {"type": "integer", "minimum": 1},
        "visits": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["district", "date"],
                "properties": {
                    "district": {"type": "string", "minLength": 1},
                    "date": _DATE,
                    "students": {"type": "integer"},
                    "lat": {"type": "number"},
                    "lng": {"type": "number"},
                    "note": {"type": "string"},
                },
                "additionalProperties": True,
            },
        },
        "upcoming": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["district", "scheduledDate"],
                "properties": {
                    "district": {"type": "string", "minLength": 1},
                    "scheduledDate": _DATE,
                    "students": {"type": "integer"},
                },
                "additionalProperties": True,
            },
        },
        "allDistricts": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "lat", "lng"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "lat": {"type": "number"},
                    "lng": {"type": "number"},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}


_APPEARANCES_VALIDATOR = Draft202012Validator(APPEARANCES_SCHEMA)
_TOUR_VALIDATOR = Draft202012Validator(TOUR_SCHEMA)


def _errors(validator: Draft202012Validator, payload: Any) -> List[str]:
    errors = []
    for e in sorted(validator.iter_errors(payload), key=lambda x: [str(p) for p in x.path]):
        path = ".".join(str(p) for p in e.path) if e.path else "<root>"
        errors.append(f"{path}: {e.message}")
    return errors


def validate_collection(payload: Any) -> List[str]:
    """Return a list of human-readable validation errors (empty means valid)."""
    return _errors(_APPEARANCES_VALIDATOR, payload)


def validate_tour(payload: Any) -> List[str]:
    return _errors(_TOUR_VALIDATOR, payload)


def find_duplicate_urls(payload: Dict[str, Any]) -> List[str]:
    """Return URLs carried by more than one record, in first-seen order."""
    seen = set()
    dupes: List[str] = []
    for a in payload.get("appearances") or []:
        url = a.get("url") if isinstance(a, dict) else None
        if not url:
            continue
        if url in seen and url not in dupes:
            dupes.append(url)
        seen.add(url)
    return dupes
