"""Persist statistics snapshots through the storage collaborator."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Protocol

from ..utils.errors import WriteError
from ..utils.snapshot import StatsSnapshot


class StatsStore(Protocol):
    def upsert_user_stats(self, user_id: str, row: Dict[str, Any]) -> None: ...

    def mark_synced(self, user_id: str, synced_at: datetime) -> None: ...


class StatsWriter:
    def __init__(self, store: StatsStore):
        self._store = store

    def write_snapshot(self, user_id: str, snapshot: StatsSnapshot) -> Dict[str, Any]:
        """Store the snapshot as a user-stats row and return the row written."""
        row = self.to_row(snapshot)
        try:
            self._store.upsert_user_stats(user_id, row)
        except Exception as exc:
            raise WriteError("user_stats", str(exc), user_id=user_id) from exc
        return row

    def mark_synced(self, user_id: str, synced_at: datetime) -> None:
        try:
            self._store.mark_synced(user_id, synced_at)
        except Exception as exc:
            raise WriteError("connection", str(exc), user_id=user_id) from exc

    @staticmethod
    def to_row(snapshot: StatsSnapshot) -> Dict[str, Any]:
        """Flatten a snapshot into the stored row layout.

        Window counts and trends become one column each and the subject
        breakdown is stored as a list so that rows stay order-stable.
        """
        counts = snapshot.absence_counts
        trends = snapshot.trend_changes
        subject_rows: List[Dict[str, Any]] = [
            {"subject": subject, **stats.to_dict()}
            for subject, stats in sorted(snapshot.subject_breakdown.items())
        ]
        return {
            "absences7Days": counts.last_7_days,
            "absences14Days": counts.last_14_days,
            "absences30Days": counts.last_30_days,
            "absencesAllTime": counts.all_time,
            "trend7Days": trends.last_7_days.to_dict(),
            "trend14Days": trends.last_14_days.to_dict(),
            "trend30Days": trends.last_30_days.to_dict(),
            "subjectBreakdown": subject_rows,
            "dailyTrend": [point.to_dict() for point in snapshot.daily_trend],
            "absenceRate": snapshot.absence_rate,
            "totalRealLessons": snapshot.total_real_lessons,
            "totalAbsences": snapshot.total_absences,
            "lastCalculated": snapshot.computed_at,
        }
