"""Determine how far back to fetch timetable and absence data."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..config.settings import SyncConfig


def school_year_start(today: date, config: Optional[SyncConfig] = None) -> date:
    """Return the configured start date of the school year containing ``today``."""
    config = config or SyncConfig()
    year = today.year
    if (today.month, today.day) < (config.school_year_start_month, config.school_year_start_day):
        year -= 1
    return date(year, config.school_year_start_month, config.school_year_start_day)


def lookback_start(
    today: date,
    data_start_date: Optional[date] = None,
    config: Optional[SyncConfig] = None,
) -> date:
    """Explicit per-connection start dates win over the school-year fallback."""
    if data_start_date is not None:
        return min(data_start_date, today)
    return school_year_start(today, config)
