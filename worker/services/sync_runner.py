"""Orchestrates a sync cycle: fetch, compute and store stats per user."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..clients.logging import get_logger, log_compute, log_cycle, log_fetch, log_write
from ..config.config_loader import load_runtime_config
from ..config.settings import RuntimeConfig
from ..fetchers.base import BaseFetcher
from ..utils.errors import StatsSyncError
from ..utils.timing import timed
from ..writers.stats_writer import StatsWriter
from .school_year import lookback_start
from .stats_builder import calculate_stats

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserConnection:
    user_id: str
    server_url: str
    school: str
    username: str
    secret: str
    is_active: bool = True
    data_start_date: Optional[date] = None


@dataclass(frozen=True)
class SyncResult:
    user_id: str
    success: bool
    error: Optional[str] = None
    duration_ms: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "success": self.success,
            "error": self.error,
            "duration": self.duration_ms,
        }


class SyncRunner:
    def __init__(
        self,
        fetcher: BaseFetcher,
        writer: StatsWriter,
        runtime_config: RuntimeConfig | None = None,
    ):
        self._fetcher = fetcher
        self._writer = writer
        self._config = runtime_config or load_runtime_config()

    def run_cycle(
        self,
        connections: Iterable[UserConnection],
        now: datetime | None = None,
    ) -> List[SyncResult]:
        """Sync every active connection, one after another.

        Users are processed sequentially so the upstream service sees one
        session at a time. A failing user is reported in its SyncResult and
        does not stop the cycle.
        """
        now = now or datetime.now(timezone.utc)
        start = time.monotonic()
        active = [connection for connection in connections if connection.is_active]
        logger.info(f"Found {len(active)} active connections to sync", extra={"stage": "cycle"})

        results = [self.sync_user(connection, now) for connection in active]

        failures = {r.user_id: r.error or "Unknown error" for r in results if not r.success}
        log_cycle(
            logger,
            successful=len(results) - len(failures),
            failed=len(failures),
            duration_ms=int((time.monotonic() - start) * 1000),
            failures=failures,
        )
        return results

    def sync_user(self, connection: UserConnection, now: datetime) -> SyncResult:
        user_id = connection.user_id
        metrics: Dict[str, int] = {}
        start = time.monotonic()
        today = now.date()
        range_start = lookback_start(today, connection.data_start_date, self._config.sync)

        try:
            with self._fetcher.session(connection) as fetcher:
                with timed("fetch", metrics):
                    lessons = fetcher.fetch_lessons(range_start, today, user_id=user_id)
                    absences = fetcher.fetch_absences(range_start, today, user_id=user_id)
            log_fetch(logger, user_id, len(lessons), len(absences), metrics["fetch_ms"])

            with timed("compute", metrics):
                snapshot = calculate_stats(lessons, absences, now)
            log_compute(
                logger,
                user_id,
                snapshot.total_real_lessons,
                snapshot.total_absences,
                metrics["compute_ms"],
            )

            with timed("write", metrics):
                self._writer.write_snapshot(user_id, snapshot)
                self._writer.mark_synced(user_id, now)
            log_write(logger, user_id, "user_stats", metrics["write_ms"])
        except StatsSyncError as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.error(
                f"Failed to sync user {user_id}: {exc}",
                extra={"user_id": user_id, "transient": exc.transient, "duration_ms": duration_ms},
            )
            return SyncResult(user_id=user_id, success=False, error=str(exc), duration_ms=duration_ms)
        except Exception as exc:
            duration_ms = int((time.monotonic() - start) * 1000)
            logger.error(
                f"Unexpected error syncing user {user_id}",
                extra={"user_id": user_id, "duration_ms": duration_ms},
                exc_info=True,
            )
            return SyncResult(user_id=user_id, success=False, error=str(exc) or type(exc).__name__, duration_ms=duration_ms)

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(f"Successfully synced user {user_id}", extra={"user_id": user_id, "duration_ms": duration_ms})
        return SyncResult(user_id=user_id, success=True, duration_ms=duration_ms)
