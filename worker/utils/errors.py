"""Custom exception classes for stats sync errors."""

from __future__ import annotations


class StatsSyncError(Exception):
    """Base exception for per-user sync failures."""

    def __init__(self, message: str, user_id: str | None = None, transient: bool = False):
        super().__init__(message)
        self.user_id = user_id
        self.transient = transient


class FetchError(StatsSyncError):
    """Raised when the fetch collaborator cannot deliver records."""

    def __init__(self, entity: str, message: str, user_id: str | None = None, transient: bool = True):
        super().__init__(f"Failed to fetch {entity}: {message}", user_id=user_id, transient=transient)
        self.entity = entity


class WriteError(StatsSyncError):
    """Raised when writing a snapshot fails."""

    def __init__(self, target: str, message: str, user_id: str | None = None):
        super().__init__(f"Failed to write to {target}: {message}", user_id=user_id, transient=True)
        self.target = target


class InvalidDayCodeError(ValueError):
    """Raised when a value is not an 8-digit YYYYMMDD day-code."""

    def __init__(self, value: object):
        super().__init__(f"Invalid day-code {value!r}: expected 8-digit YYYYMMDD")
        self.value = value
