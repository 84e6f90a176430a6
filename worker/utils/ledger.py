"""Dataclasses describing normalized input records and ledger entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

UNKNOWN_SUBJECT = "Unknown"


@dataclass(frozen=True)
class LessonRecord:
    day_code: Optional[int]
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    subject: Optional[str] = None
    is_cancelled: bool = False


@dataclass(frozen=True)
class AbsenceRecord:
    start_day: Optional[int]
    end_day: Optional[int] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    is_excused: bool = False
    reason: Optional[str] = None
    subject: Optional[str] = None

    @property
    def last_day(self) -> Optional[int]:
        return self.end_day or self.start_day


@dataclass(frozen=True)
class LedgerEntry:
    """Outcome of a single lesson instance."""

    date: str
    subject: str
    is_cancelled: bool
    is_absent: bool

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    @property
    def is_real(self) -> bool:
        return not self.is_cancelled

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "subject": self.subject,
            "isCancelled": self.is_cancelled,
            "isAbsent": self.is_absent,
        }
