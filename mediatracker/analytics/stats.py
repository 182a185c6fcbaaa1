"""Headline numbers for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from mediatracker.analytics.breakdowns import parse_day
from mediatracker.records.appearance_types import AppearanceCollection


@dataclass(frozen=True)
class DashboardStats:
    appearances: int
    needs_review: int
    days_in_office: int
    appearances_per_week: float
    last_updated: Optional[str]


def days_in_office(office_start: date, today: date) -> int:
    # Whole days between the two dates, partial days rounded up: the start
    # day counts as day 1 and dates before it count the distance back.
    delta = (today - office_start).days
    return delta + 1 if delta >= 0 else -delta


def appearances_per_week(count: int, days: int) -> float:
    return round(count / max(days / 7.0, 1.0), 1)


def dashboard_stats(collection: AppearanceCollection, today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    days = 0
    if collection.office_start_date:
        days = days_in_office(parse_day(collection.office_start_date), today)
    count = len(collection.appearances)
    return DashboardStats(
        appearances=count,
        needs_review=sum(1 for a in collection.appearances if a.needs_review),
        days_in_office=days,
        appearances_per_week=appearances_per_week(count, days),
        last_updated=collection.last_updated,
    )
