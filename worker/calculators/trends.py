"""Period-over-period absence trends."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Sequence

from ..utils.ledger import LedgerEntry
from ..utils.rounding import percent_change
from ..utils.snapshot import (
    DIRECTION_DOWN,
    DIRECTION_NEUTRAL,
    DIRECTION_UP,
    TrendChanges,
    TrendData,
)
from ..utils.windowing import count_in_range


def run(ledger: Sequence[LedgerEntry], today: date) -> TrendChanges:
    absent_days = [entry.day for entry in ledger if entry.is_absent]
    return TrendChanges(
        last_7_days=window_trend(absent_days, today, 7),
        last_14_days=window_trend(absent_days, today, 14),
        last_30_days=window_trend(absent_days, today, 30),
    )


def window_trend(absent_days: List[date], today: date, window_days: int) -> TrendData:
    """Compare [today-W, today] with the preceding span [today-2W+1, today-W-1]."""
    current = count_in_range(absent_days, today - timedelta(days=window_days), today)
    previous = count_in_range(
        absent_days,
        today - timedelta(days=2 * window_days - 1),
        today - timedelta(days=window_days + 1),
    )
    return trend_data(current, previous)


def trend_data(current: int, previous: int) -> TrendData:
    if previous == 0:
        change = 100 if current > 0 else 0
    else:
        change = percent_change(current, previous)
    if change > 0:
        direction = DIRECTION_UP
    elif change < 0:
        direction = DIRECTION_DOWN
    else:
        direction = DIRECTION_NEUTRAL
    return TrendData(previous_value=previous, change_percent=change, direction=direction)
