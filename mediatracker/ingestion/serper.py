"""Serper (Google News) search client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import requests

from mediatracker.ingestion.search_types import SearchResult


@dataclass(frozen=True)
class SerperNewsSearch:
    api_key: str
    endpoint: str = "https://google.serper.dev/news"
    timeout: int = 30

    name: str = "serper"

    def search(self, query: str, *, num: int = 10, recency: Optional[str] = "qdr:w") -> List[SearchResult]:
        body = {"q": query, "num": num}
        if recency:
            body["tbs"] = recency
        headers = {"X-API-KEY": self.api_key, "Content-Type": "application/json"}
        resp = requests.post(self.endpoint, json=body, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json() or {}
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Serper response type: {type(data).__name__}")
        items = data.get("news") or []
        out: List[SearchResult] = []
        for it in items:
            if not isinstance(it, dict):
                continue
            link = it.get("link") or ""
            title = it.get("title") or ""
            if not link or not title:
                continue
            out.append(
                SearchResult(
                    title=str(title).strip(),
                    link=str(link).strip(),
                    source=str(it.get("source") or "").strip(),
                    snippet=(it.get("snippet") or None),
                    date=(it.get("date") or None),
                    raw=it,
                )
            )
        return out
