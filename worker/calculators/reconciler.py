"""Match lessons against absence periods to build the per-lesson ledger."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..utils import day_codes
from ..utils.errors import InvalidDayCodeError
from ..utils.ledger import UNKNOWN_SUBJECT, AbsenceRecord, LedgerEntry, LessonRecord
from ..utils.time_of_day import END_OF_DAY, START_OF_DAY, TimeOfDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AbsenceInterval:
    start: TimeOfDay
    end: TimeOfDay

    def overlaps(self, start: TimeOfDay, end: TimeOfDay) -> bool:
        return start < self.end and end > self.start


def run(lessons: Iterable[LessonRecord], absences: Iterable[AbsenceRecord]) -> Tuple[LedgerEntry, ...]:
    intervals = expand_absences(absences)
    ledger: List[LedgerEntry] = []
    for lesson in lessons:
        entry = _reconcile_lesson(lesson, intervals)
        if entry is not None:
            ledger.append(entry)
    return tuple(ledger)


def expand_absences(absences: Iterable[AbsenceRecord]) -> Dict[str, List[AbsenceInterval]]:
    """Split each absence into one time interval per covered calendar day.

    The first day runs from the absence start to end of day, the last day from
    start of day to the absence end, and interior days cover the whole day.
    A single-day absence keeps its exact start and end.
    """
    by_date: Dict[str, List[AbsenceInterval]] = defaultdict(list)
    for absence in absences:
        if not absence.start_day:
            logger.warning("Skipping absence without start date", extra={"absence": repr(absence)})
            continue
        try:
            first = day_codes.to_date(absence.start_day)
            last = day_codes.to_date(absence.last_day)
            absence_start = _time_or(absence.start_time, START_OF_DAY)
            absence_end = _time_or(absence.end_time, END_OF_DAY)
        except (InvalidDayCodeError, ValueError) as exc:
            logger.warning("Skipping malformed absence", extra={"absence": repr(absence), "error": str(exc)})
            continue
        if last < first:
            logger.warning("Skipping absence ending before it starts", extra={"absence": repr(absence)})
            continue

        current = absence.start_day
        last_code = day_codes.encode(last)
        while current <= last_code:
            start = absence_start if current == absence.start_day else START_OF_DAY
            end = absence_end if current == last_code else END_OF_DAY
            by_date[day_codes.iso_string(current)].append(AbsenceInterval(start, end))
            current = day_codes.increment(current)
    return dict(by_date)


def _reconcile_lesson(
    lesson: LessonRecord,
    intervals: Dict[str, Sequence[AbsenceInterval]],
) -> Optional[LedgerEntry]:
    if not lesson.day_code:
        logger.warning("Skipping lesson without date", extra={"lesson": repr(lesson)})
        return None
    try:
        lesson_date = day_codes.iso_string(lesson.day_code)
        day_codes.to_date(lesson.day_code)
        start = _time_or(lesson.start_time, START_OF_DAY)
        end = _time_or(lesson.end_time, END_OF_DAY)
    except (InvalidDayCodeError, ValueError) as exc:
        logger.warning("Skipping malformed lesson", extra={"lesson": repr(lesson), "error": str(exc)})
        return None

    subject = lesson.subject or UNKNOWN_SUBJECT
    if lesson.is_cancelled:
        return LedgerEntry(date=lesson_date, subject=subject, is_cancelled=True, is_absent=False)

    is_absent = any(interval.overlaps(start, end) for interval in intervals.get(lesson_date, ()))
    return LedgerEntry(date=lesson_date, subject=subject, is_cancelled=False, is_absent=is_absent)


def _time_or(value: Optional[int], default: TimeOfDay) -> TimeOfDay:
    if not value:
        return default
    return TimeOfDay.from_hhmm(value)
