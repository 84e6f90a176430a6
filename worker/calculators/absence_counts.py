"""Trailing-window absence counts."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from ..utils.ledger import LedgerEntry
from ..utils.snapshot import AbsenceCounts
from ..utils.windowing import count_in_window

WINDOW_DAYS = (7, 14, 30)


def run(ledger: Sequence[LedgerEntry], today: date) -> AbsenceCounts:
    """Count absences in the trailing windows ending at ``today``.

    ``all_time`` is recomputed from the full ledger on every call; no
    baseline from an earlier snapshot is carried over.
    """
    absent_days = [entry.day for entry in ledger if entry.is_absent]
    last_7, last_14, last_30 = (count_in_window(absent_days, days, today) for days in WINDOW_DAYS)
    return AbsenceCounts(
        last_7_days=last_7,
        last_14_days=last_14,
        last_30_days=last_30,
        all_time=len(absent_days),
    )
