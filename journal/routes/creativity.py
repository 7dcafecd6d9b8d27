from __future__ import annotations

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from ..logs import LogContext
from ..services.creativity_svc import CreativityService
from .deps import DATE_PATTERN, IdBody, UpdateBody, get_clock, get_store, run_logged, run_read

router = APIRouter()


class CreativitySave(BaseModel):
    text: str
    entry_date: str = Field(..., pattern=DATE_PATTERN)


def _svc(request: Request) -> CreativityService:
    return CreativityService(get_store(request), get_clock(request))


@router.post("/api/creativity/save")
def api_creativity_save(body: CreativitySave, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "SAVE_CREATIVITY")
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.save(body.text, body.entry_date))


@router.get("/api/creativity/list")
def api_creativity_list(request: Request):
    return {"items": _svc(request).list_all()}


@router.get("/api/creativity/get/{entry_id}")
def api_creativity_get(entry_id: int, request: Request):
    return run_read(lambda: _svc(request).get_by_id(entry_id))


@router.get("/api/creativity/by-date")
def api_creativity_by_date(request: Request, date: str = Query(..., pattern=DATE_PATTERN)):
    svc = _svc(request)
    return {"date": date, "item": run_read(lambda: svc.get_by_date(date))}


@router.get("/api/creativity/has")
def api_creativity_has(request: Request, date: str = Query(..., pattern=DATE_PATTERN)):
    return {"date": date, "exists": run_read(lambda: _svc(request).has_entry_for_date(date))}


@router.post("/api/creativity/update")
def api_creativity_update(body: UpdateBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "UPDATE_CREATIVITY")
    log.set_entity("creativity_entry", body.id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.update(body.id, body.text))


@router.post("/api/creativity/delete")
def api_creativity_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_CREATIVITY")
    log.set_entity("creativity_entry", body.id)

    def _delete():
        svc.delete(body.id)
        return {"message": "ok"}

    return run_logged(log, _delete)


@router.get("/api/creativity/streak")
def api_creativity_streak(request: Request):
    return {"streak": _svc(request).streak()}
