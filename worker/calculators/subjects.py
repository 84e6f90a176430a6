"""Per-subject attendance breakdown."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Sequence

from ..utils.ledger import UNKNOWN_SUBJECT, LedgerEntry
from ..utils.rounding import percent
from ..utils.snapshot import SubjectStats


def run(ledger: Sequence[LedgerEntry]) -> Dict[str, SubjectStats]:
    totals: Dict[str, Dict[str, int]] = defaultdict(lambda: {"absences": 0, "cancelled": 0, "total": 0})
    for entry in ledger:
        counts = totals[entry.subject or UNKNOWN_SUBJECT]
        counts["total"] += 1
        if entry.is_cancelled:
            counts["cancelled"] += 1
        elif entry.is_absent:
            counts["absences"] += 1

    breakdown: Dict[str, SubjectStats] = {}
    for subject, counts in totals.items():
        real_lessons = counts["total"] - counts["cancelled"]
        breakdown[subject] = SubjectStats(
            attended=real_lessons - counts["absences"],
            absences=counts["absences"],
            cancelled=counts["cancelled"],
            total=counts["total"],
            absence_rate=percent(counts["absences"], real_lessons),
        )
    return breakdown
