from __future__ import annotations

from typing import Callable, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel

from ..db import Store
from ..domain.clock import Clock
from ..errors import (
    ExhaustedPool,
    InvalidInput,
    JournalError,
    NotFound,
    QuotaExceeded,
    StorageUnavailable,
)
from ..logs import LogContext

T = TypeVar("T")

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

_STATUS = (
    (NotFound, 404),
    (InvalidInput, 400),
    (QuotaExceeded, 409),
    (ExhaustedPool, 409),
    (StorageUnavailable, 503),
)


class TextBody(BaseModel):
    text: str


class IdBody(BaseModel):
    id: int


class UpdateBody(BaseModel):
    id: int
    text: str


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None or store.closed:
        raise HTTPException(status_code=503, detail="storage_unavailable")
    return store


def get_clock(request: Request) -> Clock:
    return getattr(request.app.state, "clock", None) or Clock()


def http_error(e: JournalError) -> HTTPException:
    for cls, status in _STATUS:
        if isinstance(e, cls):
            return HTTPException(status_code=status, detail={"code": e.code, "message": str(e)})
    return HTTPException(status_code=500, detail={"code": e.code, "message": str(e)})


def run_logged(log: LogContext, fn: Callable[[], T]) -> T:
    """Run a mutation, record OK/ERROR in the audit log, map errors to HTTP."""
    try:
        out = fn()
    except JournalError as e:
        log.write("ERROR", str(e))
        raise http_error(e) from e
    except Exception as e:
        log.write("ERROR", str(e))
        raise
    if isinstance(out, dict) and "id" in out:
        log.set_after(out)
    log.write("OK")
    return out


def run_read(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except JournalError as e:
        raise http_error(e) from e
