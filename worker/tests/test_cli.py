"""Tests for the compute command."""

import json

from worker.cli import main


def _run(capsys, fixtures_dir, *extra):
    code = main(
        [
            "compute",
            "--lessons",
            str(fixtures_dir / "lessons.json"),
            "--absences",
            str(fixtures_dir / "absences.json"),
            "--now",
            "2025-01-17T12:00:00",
            *extra,
        ]
    )
    return code, capsys.readouterr()


def test_compute_prints_snapshot(capsys, fixtures_dir):
    code, captured = _run(capsys, fixtures_dir)

    assert code == 0
    output = json.loads(captured.out)
    assert output["absenceCounts"] == {"last7Days": 6, "last14Days": 7, "last30Days": 7, "allTime": 7}
    assert output["absenceRate"] == 24.14
    assert output["lastUpdated"] == "2025-01-17T12:00:00"
    assert "subjectRisk" not in output
    assert "ledger" not in output


def test_compute_with_risk_and_ledger(capsys, fixtures_dir):
    code, captured = _run(capsys, fixtures_dir, "--risk", "--ledger", "--indent", "0")

    assert code == 0
    output = json.loads(captured.out)
    assert [item["subject"] for item in output["subjectRisk"]] == ["M", "D", "SP"]
    assert output["subjectRisk"][0]["severity"] == "critical"
    assert len(output["ledger"]) == 30
    assert output["ledger"][0] == {"date": "2025-01-06", "subject": "M", "isCancelled": False, "isAbsent": True}


def test_missing_file_returns_error(capsys, tmp_path, fixtures_dir):
    code = main(
        [
            "compute",
            "--lessons",
            str(tmp_path / "missing.json"),
            "--absences",
            str(fixtures_dir / "absences.json"),
        ]
    )

    assert code == 1
    assert "Error" in capsys.readouterr().err


def test_bad_now_returns_error(capsys, fixtures_dir):
    code, captured = _run(capsys, fixtures_dir, "--now", "yesterday")

    assert code == 1
    assert "Invalid --now" in captured.err
