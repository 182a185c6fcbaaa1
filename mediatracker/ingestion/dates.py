"""Normalize provider date strings into ISO calendar dates."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional


_RELATIVE = re.compile(r"^(\d+|an?)\s+(minute|min|hour|day|week|month|year)s?\s+ago$", re.IGNORECASE)

_UNIT_DAYS = {
    "minute": 0,
    "min": 0,
    "hour": 0,
    "day": 1,
    "week": 7,
    "month": 30,
    "year": 365,
}

_ABSOLUTE_FORMATS = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%m/%d/%Y",
)


def _parse_relative(s: str, today: date) -> Optional[date]:
    m = _RELATIVE.match(s)
    if not m:
        return None
    qty = 1 if m.group(1).lower() in ("a", "an") else int(m.group(1))
    days = _UNIT_DAYS[m.group(2).lower()]
    # Sub-day offsets ("5 hours ago") stay on today's date.
    return today - timedelta(days=qty * days)


def normalize_date(value: Any, today: date) -> str:
    """Return `value` as YYYY-MM-DD; unknown or missing values map to `today`."""
    if not value:
        return today.isoformat()
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    s = str(value).strip()
    if not s:
        return today.isoformat()

    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        pass

    rel = _parse_relative(s, today)
    if rel is not None:
        return rel.isoformat()

    for fmt in _ABSOLUTE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date().isoformat()
        except ValueError:
            continue
    return today.isoformat()
