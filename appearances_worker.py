#!/usr/bin/env python3
"""Weekly appearances update worker.

Runs one update cycle (or scheduled, weekly):
- search the news API for new mentions of the subject
- append them to the data file as review-flagged placeholder records
- email a summary to the notify address (+ mailing list members)

Missing credentials switch off the matching step; a broken data file aborts
the run with a non-zero exit status.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import schedule
from dotenv import load_dotenv

from mediatracker.config import TrackerConfig
from mediatracker.ingestion.aggregator import find_new_appearances
from mediatracker.ingestion.search_types import NewsSearch
from mediatracker.ingestion.serper import SerperNewsSearch
from mediatracker.notify.emailer import ResendEmailClient, send_notification
from mediatracker.notify.mailing_list import NotionMailingList, mailing_list_from_config
from mediatracker.records.appearance_types import Appearance, AppearanceCandidate
from mediatracker.records.placeholders import append_placeholders
from mediatracker.storage.appearances_store import AppearanceStore, known_urls

logger = logging.getLogger("appearances_worker")


@dataclass
class UpdateResult:
    candidates: List[AppearanceCandidate] = field(default_factory=list)
    records: List[Appearance] = field(default_factory=list)
    notified: bool = False


def configure_logging() -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = os.environ.get("LOG_FILE", "").strip()
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def run_once(
    config: Optional[TrackerConfig] = None,
    *,
    search: Optional[NewsSearch] = None,
    mailing_list: Optional[NotionMailingList] = None,
    email_client: Optional[ResendEmailClient] = None,
    today: Optional[date] = None,
) -> UpdateResult:
    if config is None:
        load_dotenv()
        config = TrackerConfig.from_env()
    today = today or date.today()
    result = UpdateResult()

    logger.info("Starting weekly update...")
    store = AppearanceStore(config.appearances_path)
    collection = store.load()
    logger.info(f"Current appearances: {len(collection.appearances)}")

    if search is None and config.search_enabled:
        search = SerperNewsSearch(api_key=config.serper_api_key, timeout=config.request_timeout)
    if search is None:
        logger.info("No SERPER_API_KEY found. Skipping search.")
    else:
        result.candidates = find_new_appearances(
            config.search_queries,
            known_urls(collection),
            search,
            surname=config.subject_surname,
            today=today,
            num=config.search_results_per_query,
            recency=config.search_recency,
        )
    logger.info(f"Found {len(result.candidates)} new potential appearances.")

    if not result.candidates:
        logger.info("No new appearances found this week.")
        return result

    result.records = append_placeholders(store, collection, result.candidates, today=today)

    if mailing_list is None and config.email_enabled:
        mailing_list = mailing_list_from_config(config)
    result.notified = send_notification(
        result.candidates,
        config,
        mailing_list=mailing_list,
        client=email_client,
    )
    logger.info("Update complete!")
    return result


def run_scheduled(config: Optional[TrackerConfig] = None) -> None:
    load_dotenv()
    config = config or TrackerConfig.from_env()
    job = getattr(schedule.every(), config.update_day)
    job.at(config.update_at).do(run_once, config)
    logger.info(f"Scheduled weekly update every {config.update_day} at {config.update_at}")
    while True:
        schedule.run_pending()
        time.sleep(30)


def main() -> int:
    load_dotenv()
    configure_logging()
    mode = (os.environ.get("INGEST_MODE") or "once").lower().strip()
    if mode in ("scheduled", "daemon"):
        run_scheduled()
    else:
        run_once()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
