"""Tests for structured log output."""

import json
import logging

from worker.clients.logging import JSONFormatter, log_cycle


def _record(message, **extra):
    record = logging.LogRecord("worker.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_includes_extra_fields():
    payload = json.loads(JSONFormatter().format(_record("Records fetched", user_id="user-1", lesson_count=30)))

    assert payload["message"] == "Records fetched"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "worker.test"
    assert payload["user_id"] == "user-1"
    assert payload["lesson_count"] == 30
    assert "msg" not in payload


def test_formatter_serializes_unknown_types():
    payload = json.loads(JSONFormatter().format(_record("Synced", synced_at=object())))

    assert isinstance(payload["synced_at"], str)


def test_log_cycle_reports_failures(caplog):
    logger = logging.getLogger("worker.test.cycle")

    with caplog.at_level(logging.INFO, logger="worker.test.cycle"):
        log_cycle(logger, successful=2, failed=1, duration_ms=12, failures={"user-3": "timeout"})

    record = caplog.records[-1]
    assert record.getMessage() == "Sync cycle completed: 2 successful, 1 failed"
    assert record.failures == {"user-3": "timeout"}
    assert record.stage == "cycle"
