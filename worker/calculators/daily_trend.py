"""Cumulative absence-rate series over the trailing 30 days."""

from __future__ import annotations

from bisect import bisect_right
from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from ..utils.ledger import LedgerEntry
from ..utils.rounding import percent
from ..utils.snapshot import DailyTrendPoint
from ..utils.windowing import trailing_days

TREND_DAYS = 30


def run(ledger: Sequence[LedgerEntry], today: date, days: int = TREND_DAYS) -> Tuple[DailyTrendPoint, ...]:
    """Build one point per day for the ``days`` days ending at ``today``.

    Each point holds running totals since the earliest ledger date. Days with
    no lessons repeat the previous point so the plotted line stays flat over
    weekends and holidays.
    """
    cumulative = _cumulative_by_date(ledger)
    recorded_dates = sorted(cumulative)

    points: List[DailyTrendPoint] = []
    for day in trailing_days(today, days):
        iso = day.isoformat()
        if iso in cumulative:
            points.append(_point(iso, *cumulative[iso]))
        elif points:
            previous = points[-1]
            points.append(
                DailyTrendPoint(
                    date=iso,
                    absence_rate=previous.absence_rate,
                    total_lessons=previous.total_lessons,
                    absences=previous.absences,
                )
            )
        else:
            # First point of the horizon: fall back to the last total recorded before it.
            index = bisect_right(recorded_dates, iso)
            if index:
                points.append(_point(iso, *cumulative[recorded_dates[index - 1]]))
            else:
                points.append(DailyTrendPoint(date=iso))
    return tuple(points)


def _cumulative_by_date(ledger: Sequence[LedgerEntry]) -> Dict[str, Tuple[int, int]]:
    per_day: Dict[str, List[int]] = defaultdict(lambda: [0, 0])
    for entry in ledger:
        bucket = per_day[entry.date]
        if entry.is_real:
            bucket[0] += 1
            if entry.is_absent:
                bucket[1] += 1

    cumulative: Dict[str, Tuple[int, int]] = {}
    real_lessons = 0
    absences = 0
    for iso in sorted(per_day):
        real_lessons += per_day[iso][0]
        absences += per_day[iso][1]
        cumulative[iso] = (real_lessons, absences)
    return cumulative


def _point(iso: str, real_lessons: int, absences: int) -> DailyTrendPoint:
    return DailyTrendPoint(
        date=iso,
        absence_rate=percent(absences, real_lessons),
        total_lessons=real_lessons,
        absences=absences,
    )
