"""Fetcher that turns a school-data client session into normalized records."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import date
from typing import Any, Callable, Iterator, List, Protocol

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..utils.errors import FetchError
from ..utils.ledger import AbsenceRecord, LessonRecord
from ..utils.records import normalize_absences, normalize_lessons

RETRY_ATTEMPTS = int(os.getenv("FETCH_RETRY_ATTEMPTS", "3"))
RETRY_MAX_WAIT_SECONDS = float(os.getenv("FETCH_RETRY_MAX_WAIT_SECONDS", "10"))

logger = logging.getLogger(__name__)


class SchoolDataClient(Protocol):
    """Upstream timetable source; authentication is the client's concern."""

    def login(self, connection: Any) -> None: ...

    def logout(self) -> None: ...

    def get_timetable(self, start: date, end: date) -> List[dict]: ...

    def get_absences(self, start: date, end: date) -> List[dict]: ...


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, FetchError) and exc.transient


class BaseFetcher:
    def __init__(self, client: SchoolDataClient):
        self._client = client

    @contextmanager
    def session(self, connection: Any) -> Iterator["BaseFetcher"]:
        """Log in for the duration of the block and always log out afterwards."""
        try:
            self._client.login(connection)
        except FetchError:
            raise
        except Exception as exc:
            raise FetchError("session", str(exc), user_id=getattr(connection, "user_id", None), transient=False) from exc
        try:
            yield self
        finally:
            try:
                self._client.logout()
            except Exception as exc:
                logger.debug(f"Ignoring logout failure: {exc}")

    def fetch_lessons(self, start: date, end: date, user_id: str | None = None) -> List[LessonRecord]:
        raw = self._fetch_with_retry("timetable", self._client.get_timetable, start, end, user_id)
        return normalize_lessons(raw)

    def fetch_absences(self, start: date, end: date, user_id: str | None = None) -> List[AbsenceRecord]:
        raw = self._fetch_with_retry("absences", self._client.get_absences, start, end, user_id)
        return normalize_absences(raw)

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.5, max=RETRY_MAX_WAIT_SECONDS),
        reraise=True,
    )
    def _fetch_with_retry(
        self,
        entity: str,
        call: Callable[[date, date], List[dict]],
        start: date,
        end: date,
        user_id: str | None,
    ) -> List[dict]:
        try:
            records = call(start, end)
        except FetchError:
            raise
        except (ConnectionError, TimeoutError) as exc:
            logger.warning(
                f"Transient failure fetching {entity}",
                extra={"user_id": user_id, "entity": entity, "error": str(exc)},
            )
            raise FetchError(entity, str(exc), user_id=user_id) from exc
        except Exception as exc:
            raise FetchError(entity, str(exc), user_id=user_id, transient=False) from exc
        return list(records or [])
