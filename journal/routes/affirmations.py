from __future__ import annotations

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from ..logs import LogContext
from ..services.affirmation_svc import AffirmationService
from .deps import IdBody, TextBody, UpdateBody, get_clock, get_store, run_logged, run_read

router = APIRouter()


class CompletionCreate(BaseModel):
    affirmation_id: int


def _svc(request: Request) -> AffirmationService:
    return AffirmationService(get_store(request), get_clock(request))


@router.get("/api/affirmations/list")
def api_affirmations_list(request: Request):
    return {"items": _svc(request).list_all()}


@router.get("/api/affirmations/active")
def api_affirmations_active(request: Request):
    return {"item": _svc(request).active()}


@router.get("/api/affirmations/get/{affirmation_id}")
def api_affirmations_get(affirmation_id: int, request: Request):
    return run_read(lambda: _svc(request).get_by_id(affirmation_id))


@router.post("/api/affirmations/add", status_code=201)
def api_affirmations_add(body: TextBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "ADD_AFFIRMATION")
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.add(body.text))


@router.post("/api/affirmations/update")
def api_affirmations_update(body: UpdateBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "UPDATE_AFFIRMATION")
    log.set_entity("affirmation", body.id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.update(body.id, body.text))


@router.post("/api/affirmations/delete")
def api_affirmations_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_AFFIRMATION")
    log.set_entity("affirmation", body.id)

    def _delete():
        log.set_before(svc.get_by_id(body.id))
        return {"message": "ok", "logs_deleted": svc.delete(body.id)}

    return run_logged(log, _delete)


@router.post("/api/affirmations/complete", status_code=201)
def api_affirmations_complete(body: CompletionCreate, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "COMPLETE_AFFIRMATION")
    log.set_entity("affirmation", body.affirmation_id)
    return run_logged(log, lambda: svc.log_completion(body.affirmation_id))


@router.get("/api/affirmations/completed-today")
def api_affirmations_completed_today(request: Request, affirmation_id: int | None = Query(None)):
    return {"completed": _svc(request).completed_today(affirmation_id)}


@router.get("/api/affirmations/logs")
def api_affirmations_logs(request: Request, affirmation_id: int | None = Query(None)):
    return {"items": _svc(request).list_logs(affirmation_id)}


@router.post("/api/affirmations/logs/delete")
def api_affirmations_logs_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_COMPLETION_LOG")
    log.set_entity("completion_log", body.id)

    def _delete():
        svc.delete_log(body.id)
        return {"message": "ok"}

    return run_logged(log, _delete)


@router.get("/api/affirmations/streak")
def api_affirmations_streak(request: Request):
    return {"streak": _svc(request).streak()}
