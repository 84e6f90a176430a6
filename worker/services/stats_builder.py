"""Build a complete statistics snapshot from lessons and absences."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from ..calculators import absence_counts, daily_trend, reconciler, subjects, trends
from ..utils.ledger import AbsenceRecord, LedgerEntry, LessonRecord
from ..utils.rounding import percent
from ..utils.snapshot import StatsSnapshot

logger = logging.getLogger(__name__)


def calculate_stats(
    lessons: Iterable[LessonRecord],
    absences: Iterable[AbsenceRecord],
    now: datetime,
) -> StatsSnapshot:
    """Reconcile lessons with absences and aggregate the resulting ledger.

    The result depends only on the arguments: ``now`` is the reference time
    for every trailing window and becomes the snapshot timestamp.
    """
    ledger = reconciler.run(lessons, absences)
    return build_snapshot(ledger, now)


def build_snapshot(ledger: Sequence[LedgerEntry], now: datetime) -> StatsSnapshot:
    today = now.date()
    total_real_lessons = sum(1 for entry in ledger if entry.is_real)
    total_absences = sum(1 for entry in ledger if entry.is_absent)

    snapshot = StatsSnapshot(
        absence_counts=absence_counts.run(ledger, today),
        trend_changes=trends.run(ledger, today),
        subject_breakdown=subjects.run(ledger),
        daily_trend=daily_trend.run(ledger, today),
        absence_rate=percent(total_absences, total_real_lessons),
        total_real_lessons=total_real_lessons,
        total_absences=total_absences,
        computed_at=now,
    )
    logger.debug(
        "Snapshot built",
        extra={
            "ledger_size": len(ledger),
            "total_real_lessons": total_real_lessons,
            "total_absences": total_absences,
        },
    )
    return snapshot
