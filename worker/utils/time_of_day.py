"""Time-of-day value type for HHMM integers (815 == 08:15)."""

from __future__ import annotations

from dataclasses import dataclass

PERIOD_MINUTES = 45
LUNCH_SPAN_START = 915
LUNCH_SPAN_END = 1130


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """A wall-clock time within a single day.

    HHMM integers order correctly but do not subtract correctly
    (905 - 845 is not 20 minutes), so all arithmetic goes through
    ``minutes`` instead of the raw encoding.
    """

    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.minutes < 24 * 60:
            raise ValueError(f"Time of day out of range: {self.minutes} minutes")

    @classmethod
    def from_hhmm(cls, value: int) -> "TimeOfDay":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"Invalid HHMM time {value!r}")
        hours, minutes = divmod(value, 100)
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid HHMM time {value!r}")
        return cls(hours * 60 + minutes)

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    @property
    def hhmm(self) -> int:
        return self.hour * 100 + self.minute

    def minutes_until(self, other: "TimeOfDay") -> int:
        """Signed number of minutes from this time to ``other``."""
        return other.minutes - self.minutes

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


START_OF_DAY = TimeOfDay(0)
END_OF_DAY = TimeOfDay.from_hhmm(2359)


def lesson_periods(start: TimeOfDay, end: TimeOfDay) -> int:
    """Count whole 45-minute periods between two times.

    A span running from the first block (start at or before 09:15) through
    lunch (end at or after 11:30) loses one period to the break.
    """
    duration = start.minutes_until(end)
    if duration <= 0:
        return 0
    periods = duration // PERIOD_MINUTES
    if start.hhmm <= LUNCH_SPAN_START and end.hhmm >= LUNCH_SPAN_END:
        return max(0, periods - 1)
    return periods
