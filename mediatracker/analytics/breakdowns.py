"""Grouped summaries over the appearances collection (pure functions).

Free-text labels are bucketed by ordered (predicate, bucket) rules evaluated
first-match-wins, so precedence is explicit:
    TOPIC_RULES[0] beats TOPIC_RULES[1] when both keywords occur.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from mediatracker.records.appearance_types import Appearance


Predicate = Callable[[str], bool]
Rule = Tuple[Predicate, str]


def contains_any(*keywords: str) -> Predicate:
    """Case-sensitive substring predicate."""
    return lambda text: any(k in text for k in keywords)


OUTLET_RULES: List[Rule] = [
    (contains_any("Inforum"), "Inforum"),
    (contains_any("BEK"), "BEK TV"),
    (contains_any("Tribune"), "Bismarck Tribune"),
]

TOPIC_RULES: List[Rule] = [
    (contains_any("Appointment"), "Appointment"),
    (contains_any("Tour", "First Day"), "Listening Tour"),
    (contains_any("AI"), "AI & Innovation"),
    (contains_any("Safety"), "School Safety"),
    (contains_any("Dual", "Options"), "Education Options"),
]
DEFAULT_TOPIC = "Education Policy"

OUTLET_PALETTE = ["#3B82F6", "#10B981", "#F59E0B", "#8B5CF6", "#EC4899", "#EF4444", "#6366F1", "#14B8A6"]
TOPIC_PALETTE = ["#3B82F6", "#8B5CF6", "#10B981", "#F59E0B", "#EF4444", "#EC4899"]


@dataclass(frozen=True)
class BreakdownEntry:
    label: str
    count: int
    color: str


@dataclass(frozen=True)
class CumulativePoint:
    date: str  # ISO calendar date
    label: str  # "Jan 1"
    appearances: int


def canonicalize(text: str, rules: Sequence[Rule], default: Optional[str] = None) -> str:
    """Return the bucket of the first matching rule; unmatched text maps to `default` (or itself)."""
    for pred, bucket in rules:
        if pred(text):
            return bucket
    return text if default is None else default


def breakdown(labels: Iterable[str], palette: Sequence[str]) -> List[BreakdownEntry]:
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    # sorted() is stable: equal counts keep first-seen order.
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [
        BreakdownEntry(label=label, count=count, color=palette[i % len(palette)])
        for i, (label, count) in enumerate(ranked)
    ]


def outlet_breakdown(appearances: Sequence[Appearance], rules: Sequence[Rule] = OUTLET_RULES) -> List[BreakdownEntry]:
    return breakdown((canonicalize(a.outlet, rules) for a in appearances), OUTLET_PALETTE)


def topic_breakdown(
    appearances: Sequence[Appearance],
    rules: Sequence[Rule] = TOPIC_RULES,
    default: str = DEFAULT_TOPIC,
) -> List[BreakdownEntry]:
    return breakdown((canonicalize(a.topic, rules, default) for a in appearances), TOPIC_PALETTE)


def parse_day(value: str) -> date:
    return date.fromisoformat(str(value).strip()[:10])


def short_label(d: date) -> str:
    return f"{d:%b} {d.day}"


def cumulative_series(appearances: Sequence[Appearance]) -> List[CumulativePoint]:
    """Running total of appearances, one point per calendar date."""
    days = sorted(parse_day(a.date) for a in appearances)
    totals: Dict[date, int] = {}
    for n, d in enumerate(days, start=1):
        totals[d] = n
    return [CumulativePoint(date=d.isoformat(), label=short_label(d), appearances=n) for d, n in totals.items()]
