"""Helpers for turning upstream timetable and absence dicts into records."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .ledger import AbsenceRecord, LessonRecord

logger = logging.getLogger(__name__)

CANCELLED_CODE = "cancelled"


def get_field(fields: Dict[str, Any], *keys: str) -> Any:
    """Return the first non-empty value among ``keys``."""
    for key in keys:
        value = fields.get(key)
        if value is not None and value != "":
            return value
    return None


def normalize_lessons(records: Iterable[dict]) -> List[LessonRecord]:
    lessons: List[LessonRecord] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-dict lesson record", extra={"record_type": type(record).__name__})
            continue
        code = get_field(record, "code")
        cancelled_flag = get_field(record, "isCancelled", "is_cancelled")
        lessons.append(
            LessonRecord(
                day_code=_to_int(get_field(record, "date", "day_code")),
                start_time=_to_int(get_field(record, "startTime", "start_time")),
                end_time=_to_int(get_field(record, "endTime", "end_time")),
                subject=_lesson_subject(record),
                is_cancelled=code == CANCELLED_CODE or cancelled_flag is True,
            )
        )
    return lessons


def normalize_absences(records: Iterable[dict]) -> List[AbsenceRecord]:
    absences: List[AbsenceRecord] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-dict absence record", extra={"record_type": type(record).__name__})
            continue
        absences.append(
            AbsenceRecord(
                start_day=_to_int(get_field(record, "startDate", "date", "start_day")),
                end_day=_to_int(get_field(record, "endDate", "end_day")),
                start_time=_to_int(get_field(record, "startTime", "start_time")),
                end_time=_to_int(get_field(record, "endTime", "end_time")),
                is_excused=bool(get_field(record, "isExcused", "is_excused")),
                reason=_to_str(get_field(record, "reason", "reasonName")),
                subject=_to_str(get_field(record, "subject", "subjectName")),
            )
        )
    return absences


def _lesson_subject(record: dict) -> Optional[str]:
    subjects = record.get("su")
    if isinstance(subjects, list) and subjects and isinstance(subjects[0], dict):
        name = get_field(subjects[0], "name", "longName")
        if name:
            return str(name)
    return _to_str(get_field(record, "subject", "subjectName"))


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
