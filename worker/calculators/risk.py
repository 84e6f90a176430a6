"""Classify subjects by how close their absence rate is to the safe limit."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..config.settings import RiskRules, SeverityThresholds
from ..utils.snapshot import SubjectStats

SEVERITY_GOOD = "good"


@dataclass(frozen=True)
class SubjectRisk:
    subject: str
    severity: str
    absence_rate: float
    absences: int
    total: int
    remaining_absences: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "severity": self.severity,
            "absenceRate": self.absence_rate,
            "absences": self.absences,
            "total": self.total,
            "remainingAbsences": self.remaining_absences,
        }


def run(breakdown: Mapping[str, SubjectStats], rules: Optional[RiskRules] = None) -> List[SubjectRisk]:
    """Return one entry per subject, highest absence rate first."""
    rules = rules or RiskRules()
    risks = [
        SubjectRisk(
            subject=subject,
            severity=classify(stats.absence_rate, rules.thresholds),
            absence_rate=stats.absence_rate,
            absences=stats.absences,
            total=stats.total,
            remaining_absences=remaining_absences(stats, rules.max_safe_rate),
        )
        for subject, stats in breakdown.items()
    ]
    return sorted(risks, key=lambda risk: (-risk.absence_rate, risk.subject))


def classify(absence_rate: float, thresholds: SeverityThresholds) -> str:
    if thresholds.critical is not None and absence_rate >= thresholds.critical:
        return "critical"
    if thresholds.warning is not None and absence_rate >= thresholds.warning:
        return "warning"
    if thresholds.caution is not None and absence_rate >= thresholds.caution:
        return "caution"
    return SEVERITY_GOOD


def remaining_absences(stats: SubjectStats, max_safe_rate: float) -> int:
    # Budget is taken over all scheduled lessons, cancelled ones included.
    allowed = math.floor(stats.total * max_safe_rate / 100)
    return max(0, allowed - stats.absences)
