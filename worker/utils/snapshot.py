"""Dataclasses describing the statistics snapshot handed to collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

DIRECTION_UP = "up"
DIRECTION_DOWN = "down"
DIRECTION_NEUTRAL = "neutral"


@dataclass(frozen=True)
class AbsenceCounts:
    last_7_days: int = 0
    last_14_days: int = 0
    last_30_days: int = 0
    all_time: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "last7Days": self.last_7_days,
            "last14Days": self.last_14_days,
            "last30Days": self.last_30_days,
            "allTime": self.all_time,
        }


@dataclass(frozen=True)
class TrendData:
    previous_value: int = 0
    change_percent: Optional[int] = 0
    direction: str = DIRECTION_NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "previousValue": self.previous_value,
            "changePercent": self.change_percent,
            "direction": self.direction,
        }


@dataclass(frozen=True)
class TrendChanges:
    last_7_days: TrendData = field(default_factory=TrendData)
    last_14_days: TrendData = field(default_factory=TrendData)
    last_30_days: TrendData = field(default_factory=TrendData)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            "last7Days": self.last_7_days.to_dict(),
            "last14Days": self.last_14_days.to_dict(),
            "last30Days": self.last_30_days.to_dict(),
        }


@dataclass(frozen=True)
class SubjectStats:
    attended: int = 0
    absences: int = 0
    cancelled: int = 0
    total: int = 0
    absence_rate: float = 0.0

    @property
    def real_lessons(self) -> int:
        return self.total - self.cancelled

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attended": self.attended,
            "absences": self.absences,
            "cancelled": self.cancelled,
            "total": self.total,
            "absenceRate": self.absence_rate,
        }


@dataclass(frozen=True)
class DailyTrendPoint:
    """Cumulative totals as of ``date``, not values for that day alone."""

    date: str
    absence_rate: float = 0.0
    total_lessons: int = 0
    absences: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "absenceRate": self.absence_rate,
            "totalLessons": self.total_lessons,
            "absences": self.absences,
        }


@dataclass(frozen=True)
class StatsSnapshot:
    absence_counts: AbsenceCounts
    trend_changes: TrendChanges
    subject_breakdown: Dict[str, SubjectStats]
    daily_trend: Tuple[DailyTrendPoint, ...]
    absence_rate: float
    total_real_lessons: int
    total_absences: int
    computed_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        daily: List[Dict[str, Any]] = [point.to_dict() for point in self.daily_trend]
        return {
            "absenceCounts": self.absence_counts.to_dict(),
            "trendChanges": self.trend_changes.to_dict(),
            "subjectBreakdown": {
                subject: stats.to_dict() for subject, stats in self.subject_breakdown.items()
            },
            "dailyTrend": daily,
            "absenceRate": self.absence_rate,
            "totalRealLessons": self.total_real_lessons,
            "totalAbsences": self.total_absences,
            "lastUpdated": self.computed_at.isoformat(),
        }
