"""Search provider types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol


@dataclass(frozen=True)
class SearchResult:
    """Normalized news search hit (provider-independent)."""

    title: str
    link: str
    source: str = ""
    snippet: Optional[str] = None
    date: Optional[str] = None  # provider's own format; see ingestion.dates
    raw: Optional[Dict[str, Any]] = None


class NewsSearch(Protocol):
    def search(self, query: str, *, num: int = 10, recency: Optional[str] = None) -> List[SearchResult]:
        ...
