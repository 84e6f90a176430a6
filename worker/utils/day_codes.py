"""Helpers for 8-digit YYYYMMDD day-codes used by the timetable source."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Tuple

from .errors import InvalidDayCodeError


def decode(day_code: int) -> Tuple[int, int, int]:
    """Split a day-code into (year, month, day).

    Only the fixed-width layout is checked here; use ``to_date`` when the
    components must form a real calendar date.
    """
    if isinstance(day_code, bool) or not isinstance(day_code, int):
        raise InvalidDayCodeError(day_code)
    if not 10_000_000 <= day_code <= 99_999_999:
        raise InvalidDayCodeError(day_code)
    year, rest = divmod(day_code, 10_000)
    month, day = divmod(rest, 100)
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise InvalidDayCodeError(day_code)
    return year, month, day


def encode(value: date) -> int:
    return value.year * 10_000 + value.month * 100 + value.day


def to_date(day_code: int) -> date:
    year, month, day = decode(day_code)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDayCodeError(day_code) from exc


def iso_string(day_code: int) -> str:
    year, month, day = decode(day_code)
    return f"{year:04d}-{month:02d}-{day:02d}"


def from_iso(value: str) -> int:
    """Parse a YYYY-MM-DD string back into a day-code."""
    try:
        return encode(date.fromisoformat(value))
    except (TypeError, ValueError) as exc:
        raise InvalidDayCodeError(value) from exc


def increment(day_code: int) -> int:
    """Advance a day-code by one calendar day, rolling over months and years."""
    return encode(to_date(day_code) + timedelta(days=1))
