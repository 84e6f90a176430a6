"""Unit tests for upstream record normalization."""

from worker.utils.ledger import AbsenceRecord, LessonRecord
from worker.utils.records import get_field, normalize_absences, normalize_lessons


def test_get_field_returns_first_non_empty_value():
    assert get_field({"a": None, "b": "", "c": 3}, "a", "b", "c") == 3
    assert get_field({}, "a") is None


def test_normalize_lesson_prefers_short_subject_name():
    records = [
        {
            "id": 1,
            "date": 20250106,
            "startTime": 800,
            "endTime": 845,
            "su": [{"id": 7, "name": "M", "longName": "Mathematik"}],
        }
    ]

    assert normalize_lessons(records) == [
        LessonRecord(day_code=20250106, start_time=800, end_time=845, subject="M", is_cancelled=False)
    ]


def test_normalize_lesson_subject_fallbacks():
    records = [
        {"date": 20250106, "su": [{"longName": "Mathematik"}]},
        {"date": 20250106, "su": [], "subject": "Art"},
        {"date": 20250106},
    ]

    assert [lesson.subject for lesson in normalize_lessons(records)] == ["Mathematik", "Art", None]


def test_normalize_lesson_cancellation():
    lessons = normalize_lessons(
        [
            {"date": 20250106, "code": "cancelled"},
            {"date": 20250106, "code": "irregular"},
            {"date": 20250106, "isCancelled": True},
        ]
    )

    assert [lesson.is_cancelled for lesson in lessons] == [True, False, True]


def test_normalize_lesson_without_date_keeps_record():
    lessons = normalize_lessons([{"startTime": 800, "endTime": 845}, "garbage"])

    assert lessons == [LessonRecord(day_code=None, start_time=800, end_time=845)]


def test_normalize_absence_fields():
    records = [
        {
            "id": 1,
            "startDate": 20250113,
            "endDate": 20250115,
            "startTime": 900,
            "endTime": 845,
            "isExcused": True,
            "reason": "Krank",
            "subject": "M",
        },
        {"date": "20250106", "startTime": "800"},
    ]

    absences = normalize_absences(records)

    assert absences[0] == AbsenceRecord(
        start_day=20250113,
        end_day=20250115,
        start_time=900,
        end_time=845,
        is_excused=True,
        reason="Krank",
        subject="M",
    )
    assert absences[1] == AbsenceRecord(start_day=20250106, start_time=800)
    assert absences[1].last_day == 20250106


def test_fixture_normalization(sample_lessons, sample_absences):
    assert len(sample_lessons) == 30
    assert sum(lesson.is_cancelled for lesson in sample_lessons) == 1
    assert len(sample_absences) == 3
    assert sample_absences[2].start_day is None
