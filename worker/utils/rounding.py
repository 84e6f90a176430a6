"""Rounding shared by every percentage the worker emits."""

from __future__ import annotations

import math
from fractions import Fraction


def round_half_up(value: Fraction, places: int = 0) -> Fraction:
    scale = 10 ** places
    return Fraction(math.floor(value * scale + Fraction(1, 2)), scale)


def percent(numerator: int, denominator: int, places: int = 2) -> float:
    """Return numerator/denominator as a percentage, or 0.0 for an empty denominator.

    Computed on exact fractions so that half-way values always round
    upwards regardless of binary float representation.
    """
    if denominator == 0:
        return 0.0
    return float(round_half_up(Fraction(numerator, denominator) * 100, places))


def percent_change(current: int, previous: int) -> int:
    """Whole-number percentage change from ``previous`` to ``current``."""
    return int(round_half_up(Fraction(current - previous, previous) * 100))
