"""Error taxonomy shared by services and routes.

Every failure a caller can act on is one of these; sqlite3 errors that are
not translated here propagate unchanged.
"""
from __future__ import annotations


class JournalError(Exception):
    code = "journal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)


class StorageUnavailable(JournalError):
    """The backing file could not be opened, created or read."""

    code = "storage_unavailable"


class NotFound(JournalError, LookupError):
    code = "not_found"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity}_not_found: {entity_id}")


class InvalidInput(JournalError, ValueError):
    code = "invalid_input"


class QuotaExceeded(JournalError):
    code = "quota_exceeded"

    def __init__(self, entry_date: str, limit: int):
        self.entry_date = entry_date
        self.limit = limit
        super().__init__(f"maximum number of gratitude entries for {entry_date} reached ({limit})")


class ExhaustedPool(JournalError):
    """No unassigned prompt is left for today's rotation."""

    code = "exhausted_pool"

    def __init__(self, message: str | None = None):
        super().__init__(message or "no unassigned prompt left; add more prompts")
