"""Mailing-list lookup against a Notion CRM database.

Members tagged with the distribution tag (multi-select `Tags` property) get
the weekly summary in addition to the primary notification address.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

NOTION_VERSION = "2022-06-28"


@dataclass(frozen=True)
class NotionMailingList:
    api_key: str
    database_id: str
    tag: str = "PL members"
    tags_property: str = "Tags"
    email_property: str = "Email"
    endpoint: str = "https://api.notion.com/v1/databases/{database_id}/query"
    timeout: int = 30

    def _query_page(self, cursor: Optional[str]) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "filter": {
                "property": self.tags_property,
                "multi_select": {"contains": self.tag},
            },
            "page_size": 100,
        }
        if cursor:
            body["start_cursor"] = cursor
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }
        resp = requests.post(
            self.endpoint.format(database_id=self.database_id),
            json=body,
            headers=headers,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json() or {}

    def _page_email(self, page: Dict[str, Any]) -> Optional[str]:
        props = page.get("properties") or {}
        prop = props.get(self.email_property) or {}
        email = prop.get("email") if isinstance(prop, dict) else None
        return email or None

    def fetch_emails(self) -> List[str]:
        """Return member emails; any failure is logged and yields []."""
        emails: List[str] = []
        cursor: Optional[str] = None
        try:
            while True:
                data = self._query_page(cursor)
                for page in data.get("results") or []:
                    if not isinstance(page, dict):
                        continue
                    email = self._page_email(page)
                    if email:
                        emails.append(email)
                cursor = data.get("next_cursor")
                if not data.get("has_more") or not cursor:
                    break
        except Exception as e:
            logger.error(f"Error fetching {self.tag} from Notion: {e}")
            return []

        logger.info(f"Found {len(emails)} {self.tag} emails from Notion")
        return emails


def mailing_list_from_config(config) -> Optional[NotionMailingList]:
    """Build the mailing-list client, or None (logged) when it should not run."""
    if not config.mailing_list_enabled:
        logger.info("Mailing list disabled. Skipping member emails.")
        return None
    if not config.mailing_list_configured:
        logger.info("Notion credentials not configured. Skipping member emails.")
        return None
    return NotionMailingList(
        api_key=config.notion_api_key,
        database_id=config.notion_database_id,
        tag=config.mailing_list_tag,
        timeout=config.request_timeout,
    )
