from __future__ import annotations

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from ..logs import LogContext
from ..services.config_svc import get_config
from ..services.response_svc import ResponseService
from .deps import DATE_PATTERN, IdBody, UpdateBody, get_clock, get_store, run_logged, run_read

router = APIRouter()


class ResponseCreate(BaseModel):
    prompt_id: int
    text: str


def _svc(request: Request) -> ResponseService:
    return ResponseService(get_store(request), get_clock(request))


@router.get("/api/responses/list")
def api_responses_list(request: Request):
    return {"items": _svc(request).list_all()}


@router.get("/api/responses/get/{response_id}")
def api_responses_get(response_id: int, request: Request):
    return run_read(lambda: _svc(request).get_by_id(response_id))


@router.get("/api/responses/history/{prompt_id}")
def api_responses_history(prompt_id: int, request: Request):
    return {"items": _svc(request).history_for_prompt(prompt_id)}


@router.get("/api/responses/recent")
def api_responses_recent(request: Request, days: int | None = Query(None, ge=1)):
    svc = _svc(request)
    if days is None:
        days = get_config(svc.store)["recent_answers_days"]
    return {"days": days, "items": run_read(lambda: svc.recent(days))}


@router.get("/api/responses/by-date")
def api_responses_by_date(request: Request, date: str = Query(..., pattern=DATE_PATTERN)):
    return {"date": date, "items": run_read(lambda: _svc(request).for_date(date))}


@router.get("/api/responses/today")
def api_responses_today(request: Request):
    return _svc(request).todays_answered()


@router.post("/api/responses/add", status_code=201)
def api_responses_add(body: ResponseCreate, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "ADD_RESPONSE")
    log.set_entity("prompt", body.prompt_id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.add(body.prompt_id, body.text))


@router.post("/api/responses/update")
def api_responses_update(body: UpdateBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "UPDATE_RESPONSE")
    log.set_entity("response", body.id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.update(body.id, body.text))


@router.post("/api/responses/delete")
def api_responses_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_RESPONSE")
    log.set_entity("response", body.id)

    def _delete():
        log.set_before(svc.get_by_id(body.id))
        svc.delete(body.id)
        return {"message": "ok"}

    return run_logged(log, _delete)
