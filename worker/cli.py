"""Command-line entry point for computing absence statistics from exported data."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from .calculators import reconciler, risk
from .clients.logging import configure_root
from .config.config_loader import load_runtime_config
from .services.stats_builder import build_snapshot
from .utils.records import normalize_absences, normalize_lessons


def _load_records(path: Path, key: str) -> List[dict]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    # Upstream absence exports wrap the list, e.g. {"absences": [...]}
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list or an object with a '{key}' list")
    return data


def _parse_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid --now value {value!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute absence statistics from timetable and absence exports.")
    parser.add_argument("--config", type=Path, help="Path to rules.yaml (defaults to the bundled config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compute = subparsers.add_parser("compute", help="Print a statistics snapshot as JSON")
    compute.add_argument("--lessons", type=Path, required=True, help="JSON file with timetable lessons")
    compute.add_argument("--absences", type=Path, required=True, help="JSON file with absence records")
    compute.add_argument("--now", help="Reference time in ISO format (defaults to the current UTC time)")
    compute.add_argument("--risk", action="store_true", help="Include per-subject risk classification")
    compute.add_argument("--ledger", action="store_true", help="Include the per-lesson ledger")
    compute.add_argument("--indent", type=int, default=2)
    return parser


def run_compute(args: argparse.Namespace) -> dict:
    config = load_runtime_config(args.config) if args.config else load_runtime_config()
    configure_root(config.logging.level)

    lessons = normalize_lessons(_load_records(args.lessons, "lessons"))
    absences = normalize_absences(_load_records(args.absences, "absences"))
    now = _parse_now(args.now)

    ledger = reconciler.run(lessons, absences)
    snapshot = build_snapshot(ledger, now)

    output: dict[str, Any] = snapshot.to_dict()
    if args.risk:
        output["subjectRisk"] = [item.to_dict() for item in risk.run(snapshot.subject_breakdown, config.risk)]
    if args.ledger:
        output["ledger"] = [entry.to_dict() for entry in ledger]
    return output


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "compute":
            output = run_compute(args)
        else:
            parser.error(f"Unknown command {args.command}")
            return 2
    except (OSError, ValueError, argparse.ArgumentTypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    json.dump(output, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
