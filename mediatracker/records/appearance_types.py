"""Shared record types for the appearances collection.

The persisted JSON uses camelCase keys (it is consumed directly by the
dashboard front end); these dataclasses are the Python-side view of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


REVIEW_TOPIC = "TBD - Needs Review"
PLACEHOLDER_QUOTE = "[Quote to be added]"

TV_ICON = "\U0001F4FA"  # 📺
RADIO_ICON = "\U0001F4FB"  # 📻
PRINT_ICON = "\U0001F4F0"  # 📰

_APPEARANCE_KEYS = ("id", "date", "outlet", "type", "topic", "quote", "icon", "url", "needsReview")


@dataclass(frozen=True)
class AppearanceCandidate:
    """A search hit accepted for insertion, not yet persisted."""

    title: str
    url: str
    date: str
    source: str
    snippet: Optional[str] = None


@dataclass
class Appearance:
    """One persisted media appearance."""

    id: int
    date: str
    outlet: str
    type: str = "Print"
    topic: str = REVIEW_TOPIC
    quote: str = PLACEHOLDER_QUOTE
    icon: str = PRINT_ICON
    url: Optional[str] = None
    needs_review: bool = False
    # Keys we do not model (hand-curated extras); written back unchanged.
    extra: Dict[str, Any] = field(default_factory=dict)
    # The JSON object this record was read from, if any.
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Appearance":
        return cls(
            id=int(d["id"]),
            date=str(d["date"]),
            outlet=str(d["outlet"]),
            type=str(d.get("type") or "Print"),
            topic=str(d.get("topic") or ""),
            quote=str(d.get("quote") or ""),
            icon=str(d.get("icon") or PRINT_ICON),
            url=(d.get("url") or None),
            needs_review=bool(d.get("needsReview", False)),
            extra={k: v for k, v in d.items() if k not in _APPEARANCE_KEYS},
            raw=dict(d),
        )

    def _modeled(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "outlet": self.outlet,
            "type": self.type,
            "topic": self.topic,
            "quote": self.quote,
            "icon": self.icon,
        }
        if self.url:
            out["url"] = self.url
        if self.needs_review:
            out["needsReview"] = True
        return out

    def to_dict(self) -> Dict[str, Any]:
        current = self._modeled()
        if self.raw is None:
            current.update(self.extra)
            return current

        # Loaded records are written back as read; only changed fields are touched.
        out = dict(self.raw)
        loaded = Appearance.from_dict(self.raw)._modeled()
        for k in _APPEARANCE_KEYS:
            if k in current and current[k] != loaded.get(k):
                out[k] = current[k]
            elif k not in current and k in loaded:
                out.pop(k, None)
        out.update(self.extra)
        return out


@dataclass
class AppearanceCollection:
    """The whole data file: records, lastUpdated and static dashboard fields."""

    appearances: List[Appearance] = field(default_factory=list)
    last_updated: Optional[str] = None
    # officeStartDate, appointmentDate, ... (read-only for this code base)
    meta: Dict[str, Any] = field(default_factory=dict)
    key_order: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AppearanceCollection":
        return cls(
            appearances=[Appearance.from_dict(a) for a in d.get("appearances") or []],
            last_updated=d.get("lastUpdated") or None,
            meta={k: v for k, v in d.items() if k not in ("appearances", "lastUpdated")},
            key_order=list(d.keys()),
        )

    def to_dict(self) -> Dict[str, Any]:
        values: Dict[str, Any] = dict(self.meta)
        if self.last_updated is not None:
            values["lastUpdated"] = self.last_updated
        values["appearances"] = [a.to_dict() for a in self.appearances]

        # Rewrites keep the top-level key order of the file we loaded.
        out: Dict[str, Any] = {}
        for k in self.key_order:
            if k in values:
                out[k] = values.pop(k)
        out.update(values)
        return out

    @property
    def office_start_date(self) -> Optional[str]:
        return self.meta.get("officeStartDate")

    @property
    def appointment_date(self) -> Optional[str]:
        return self.meta.get("appointmentDate")
