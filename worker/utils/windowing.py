"""Window helpers for absence calculations."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List


def count_in_range(dates: Iterable[date], start: date, end: date) -> int:
    """Count dates within [start, end], both ends inclusive."""
    return sum(1 for d in dates if start <= d <= end)


def count_in_window(dates: Iterable[date], window_days: int, anchor: date) -> int:
    return count_in_range(dates, anchor - timedelta(days=window_days), anchor)


def trailing_days(anchor: date, days: int) -> List[date]:
    """Return ``days`` consecutive dates ending at ``anchor``, oldest first."""
    return [anchor - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
