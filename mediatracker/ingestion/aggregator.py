"""Deduplicating search aggregator.

Runs each query in order against the search provider and keeps results that
are new (URL not yet known) and actually mention the subject. The known-URL
set belongs to the caller and grows as candidates are accepted, so a story
returned by several queries is only accepted once.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Set

from mediatracker.ingestion.dates import normalize_date
from mediatracker.ingestion.search_types import NewsSearch, SearchResult
from mediatracker.records.appearance_types import AppearanceCandidate

logger = logging.getLogger(__name__)


def mentions_subject(result: SearchResult, surname: str) -> bool:
    needle = (surname or "").strip().lower()
    if not needle:
        return False
    title = (result.title or "").lower()
    snippet = (result.snippet or "").lower()
    return needle in title or needle in snippet


def find_new_appearances(
    queries: Sequence[str],
    known_urls: Set[str],
    search: NewsSearch,
    *,
    surname: str,
    today: Optional[date] = None,
    num: int = 10,
    recency: Optional[str] = "qdr:w",
) -> List[AppearanceCandidate]:
    if not queries:
        raise ValueError("At least one search query is required")
    today = today or date.today()

    out: List[AppearanceCandidate] = []
    for query in queries:
        try:
            results = list(search.search(query, num=num, recency=recency))
        except Exception as e:
            logger.error(f"Search error for \"{query}\": {e}")
            continue

        accepted = 0
        for r in results:
            if not r.link or r.link in known_urls:
                continue
            if not mentions_subject(r, surname):
                continue
            out.append(
                AppearanceCandidate(
                    title=r.title,
                    url=r.link,
                    date=normalize_date(r.date, today),
                    source=r.source,
                    snippet=r.snippet,
                )
            )
            known_urls.add(r.link)
            accepted += 1
        logger.debug(f"Query \"{query}\": {len(results)} results, {accepted} new")
    return out
