"""Turn accepted candidates into provisional (review-flagged) records."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from mediatracker.records.appearance_types import (
    PLACEHOLDER_QUOTE,
    PRINT_ICON,
    RADIO_ICON,
    REVIEW_TOPIC,
    TV_ICON,
    Appearance,
    AppearanceCandidate,
    AppearanceCollection,
)
from mediatracker.storage.appearances_store import AppearanceStore

logger = logging.getLogger(__name__)


# Ordered (predicate, (icon, media type)); first match wins.
GLYPH_RULES: List[Tuple[Callable[[str], bool], Tuple[str, str]]] = [
    (lambda s: "tv" in s, (TV_ICON, "TV")),
    (lambda s: "radio" in s, (RADIO_ICON, "Radio")),
]
DEFAULT_GLYPH: Tuple[str, str] = (PRINT_ICON, "Print")


def glyph_for_source(source: Optional[str]) -> Tuple[str, str]:
    """Return (icon, media type) for a source label."""
    s = (source or "").lower()
    for pred, glyph in GLYPH_RULES:
        if pred(s):
            return glyph
    return DEFAULT_GLYPH


def next_identifier_floor(appearances: Sequence[Appearance]) -> int:
    # An empty collection starts numbering at 1.
    if not appearances:
        return 0
    return max(a.id for a in appearances)


def build_placeholder_records(candidates: Sequence[AppearanceCandidate], max_id: int) -> List[Appearance]:
    out: List[Appearance] = []
    for i, c in enumerate(candidates):
        icon, media_type = glyph_for_source(c.source)
        out.append(
            Appearance(
                id=max_id + i + 1,
                date=c.date,
                outlet=c.source,
                type=media_type,
                topic=REVIEW_TOPIC,
                quote=PLACEHOLDER_QUOTE,
                icon=icon,
                url=c.url,
                needs_review=True,
            )
        )
    return out


def append_placeholders(
    store: AppearanceStore,
    collection: AppearanceCollection,
    candidates: Sequence[AppearanceCandidate],
    *,
    today: Optional[date] = None,
) -> List[Appearance]:
    """Append placeholder records for `candidates` and rewrite the data file.

    Nothing is written (and lastUpdated stays as it was) when there are no
    candidates.
    """
    if not candidates:
        return []
    records = build_placeholder_records(candidates, next_identifier_floor(collection.appearances))
    collection.appearances.extend(records)
    collection.last_updated = (today or date.today()).isoformat()
    store.save(collection)
    logger.info(f"Added {len(records)} new appearances to {store.path}")
    return records
