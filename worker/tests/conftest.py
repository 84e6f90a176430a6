"""Pytest configuration and shared fixtures."""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import pytest

from worker.utils.records import normalize_absences, normalize_lessons

# Friday; the fixture timetable covers the two school weeks ending on this day.
REFERENCE_NOW = datetime(2025, 1, 17, 12, 0)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def raw_lessons(fixtures_dir: Path) -> List[Dict]:
    """Load upstream-shaped timetable lessons from fixtures."""
    with open(fixtures_dir / "lessons.json") as f:
        return json.load(f)


@pytest.fixture
def raw_absences(fixtures_dir: Path) -> List[Dict]:
    """Load upstream-shaped absence records from fixtures."""
    with open(fixtures_dir / "absences.json") as f:
        return json.load(f)["absences"]


@pytest.fixture
def sample_lessons(raw_lessons):
    return normalize_lessons(raw_lessons)


@pytest.fixture
def sample_absences(raw_absences):
    return normalize_absences(raw_absences)
