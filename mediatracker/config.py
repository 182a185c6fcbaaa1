"""Runtime configuration for the media tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_SUBJECT = "Levi Bachmeier"
DEFAULT_QUERIES = [
    "Levi Bachmeier superintendent",
    "Levi Bachmeier North Dakota education",
    "Bachmeier DPI interview",
]

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return list(default)
    return [q.strip() for q in raw.split("|") if q.strip()]


@dataclass
class TrackerConfig:
    """Tracker settings; every credential is optional and only gates its feature."""

    subject_name: str = DEFAULT_SUBJECT
    subject_surname: str = ""
    search_queries: List[str] = field(default_factory=lambda: list(DEFAULT_QUERIES))
    search_results_per_query: int = 10
    search_recency: str = "qdr:w"  # Google "past week"

    serper_api_key: str = ""

    # Mailing list (Notion CRM)
    notion_api_key: str = ""
    notion_database_id: str = ""
    mailing_list_enabled: bool = True
    mailing_list_tag: str = "PL members"

    # Email (Resend)
    resend_api_key: str = ""
    notify_email: str = ""
    email_from: str = "Libby Tracker <onboarding@resend.dev>"
    email_subject_prefix: str = "[Libby Tracker]"
    tracker_url: str = "https://libby-tracker.netlify.app"
    verbose_summary: bool = False

    # Files
    appearances_path: str = "data/appearances.json"
    tour_path: str = "data/schoolTour.json"

    request_timeout: int = 30

    # Scheduling
    update_day: str = "monday"
    update_at: str = "13:00"

    def __post_init__(self) -> None:
        if not self.subject_surname and self.subject_name.strip():
            self.subject_surname = self.subject_name.split()[-1]

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Load and validate configuration from environment variables"""
        config = cls(
            subject_name=os.getenv("SUBJECT_NAME", DEFAULT_SUBJECT),
            subject_surname=os.getenv("SUBJECT_SURNAME", ""),
            search_queries=_env_list("SEARCH_QUERIES", DEFAULT_QUERIES),
            search_results_per_query=int(os.getenv("SEARCH_RESULTS_PER_QUERY", "10")),
            search_recency=os.getenv("SEARCH_RECENCY", "qdr:w"),

            serper_api_key=os.getenv("SERPER_API_KEY", "").strip(),

            notion_api_key=os.getenv("NOTION_API_KEY", "").strip(),
            notion_database_id=os.getenv("NOTION_DATABASE_ID", "").strip(),
            mailing_list_enabled=_env_bool("MAILING_LIST_ENABLED", True),
            mailing_list_tag=os.getenv("MAILING_LIST_TAG", "PL members"),

            resend_api_key=os.getenv("RESEND_API_KEY", "").strip(),
            notify_email=os.getenv("NOTIFY_EMAIL", "").strip(),
            email_from=os.getenv("EMAIL_FROM", "Libby Tracker <onboarding@resend.dev>"),
            email_subject_prefix=os.getenv("EMAIL_SUBJECT_PREFIX", "[Libby Tracker]"),
            tracker_url=os.getenv("TRACKER_URL", "https://libby-tracker.netlify.app"),
            verbose_summary=_env_bool("VERBOSE_SUMMARY", False),

            appearances_path=os.getenv("APPEARANCES_PATH", "data/appearances.json"),
            tour_path=os.getenv("TOUR_PATH", "data/schoolTour.json"),

            request_timeout=int(os.getenv("REQUEST_TIMEOUT", "30")),

            update_day=os.getenv("UPDATE_DAY", "monday").strip().lower(),
            update_at=os.getenv("UPDATE_AT", "13:00").strip(),
        )

        config._validate()
        return config

    def _validate(self):
        """Validate configuration values"""
        errors = []

        if not self.subject_surname.strip():
            errors.append("SUBJECT_NAME or SUBJECT_SURNAME must be set")
        if not self.search_queries:
            errors.append("SEARCH_QUERIES must contain at least one query")
        if self.search_results_per_query <= 0:
            errors.append("SEARCH_RESULTS_PER_QUERY must be positive")
        if self.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")
        if self.update_day not in _WEEKDAYS:
            errors.append(f"UPDATE_DAY must be a weekday name, got '{self.update_day}'")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"- {e}" for e in errors))

    @property
    def search_enabled(self) -> bool:
        return bool(self.serper_api_key)

    @property
    def email_enabled(self) -> bool:
        return bool(self.resend_api_key and self.notify_email)

    @property
    def mailing_list_configured(self) -> bool:
        return bool(self.notion_api_key and self.notion_database_id)

    @property
    def tour_file(self) -> Optional[str]:
        if self.tour_path and os.path.exists(self.tour_path):
            return self.tour_path
        return None
