from __future__ import annotations

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from ..logs import LogContext
from ..services.config_svc import get_config
from ..services.gratitude_svc import GratitudeService
from .deps import DATE_PATTERN, IdBody, UpdateBody, get_clock, get_store, run_logged, run_read

router = APIRouter()


class GratitudeCreate(BaseModel):
    text: str
    entry_date: str | None = Field(None, pattern=DATE_PATTERN)


def _svc(request: Request) -> GratitudeService:
    return GratitudeService(get_store(request), get_clock(request))


@router.post("/api/gratitude/add", status_code=201)
def api_gratitude_add(body: GratitudeCreate, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "ADD_GRATITUDE")
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.add(body.text, body.entry_date))


@router.get("/api/gratitude/list")
def api_gratitude_list(request: Request):
    return {"items": _svc(request).list_all()}


@router.get("/api/gratitude/get/{item_id}")
def api_gratitude_get(item_id: int, request: Request):
    return run_read(lambda: _svc(request).get_by_id(item_id))


@router.get("/api/gratitude/today")
def api_gratitude_today(request: Request):
    svc = _svc(request)
    items = svc.today_items()
    return {"count": len(items), "items": items}


@router.get("/api/gratitude/by-date")
def api_gratitude_by_date(request: Request, date: str = Query(..., pattern=DATE_PATTERN)):
    return {"date": date, "items": run_read(lambda: _svc(request).items_for_date(date))}


@router.get("/api/gratitude/entries")
def api_gratitude_entries(request: Request):
    return {"items": _svc(request).entries()}


@router.get("/api/gratitude/last-days")
def api_gratitude_last_days(request: Request, n: int | None = Query(None, ge=1)):
    svc = _svc(request)
    if n is None:
        n = get_config(svc.store)["gratitude_history_days"]
    return {"items": run_read(lambda: svc.last_n_days(n))}


@router.post("/api/gratitude/update")
def api_gratitude_update(body: UpdateBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "UPDATE_GRATITUDE")
    log.set_entity("gratitude_item", body.id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.update(body.id, body.text))


@router.post("/api/gratitude/delete")
def api_gratitude_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_GRATITUDE")
    log.set_entity("gratitude_item", body.id)

    def _delete():
        log.set_before(svc.get_by_id(body.id))
        svc.delete(body.id)
        return {"message": "ok"}

    return run_logged(log, _delete)


@router.get("/api/gratitude/streak")
def api_gratitude_streak(request: Request):
    return {"streak": _svc(request).streak()}
