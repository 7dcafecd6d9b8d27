from __future__ import annotations

from fastapi import APIRouter, Request

from ..logs import LogContext
from ..services.prompt_svc import PromptService
from ..services.rotation_svc import RotationSelector
from .deps import IdBody, TextBody, UpdateBody, get_clock, get_store, run_logged, run_read

router = APIRouter()


def _svc(request: Request) -> PromptService:
    return PromptService(get_store(request), get_clock(request))


@router.get("/api/prompts/list")
def api_prompts_list(request: Request):
    return {"items": _svc(request).list_all()}


@router.get("/api/prompts/get/{prompt_id}")
def api_prompts_get(prompt_id: int, request: Request):
    return run_read(lambda: _svc(request).get_by_id(prompt_id))


@router.post("/api/prompts/today")
def api_prompts_today(request: Request):
    """Prompt of the day; the first call of a day assigns it, so it is audited."""
    selector = RotationSelector(get_store(request), get_clock(request))
    log = LogContext(selector.store, "ROTATE_PROMPT")
    log.set_payload({"date": selector.clock.today_str()})
    return run_logged(log, selector.select_for_today)


@router.get("/api/prompts/random")
def api_prompts_random(request: Request):
    return run_read(_svc(request).random)


@router.post("/api/prompts/add", status_code=201)
def api_prompts_add(body: TextBody, request: Request):
    log = LogContext(get_store(request), "ADD_PROMPT")
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: _svc(request).add(body.text))


@router.post("/api/prompts/update")
def api_prompts_update(body: UpdateBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "UPDATE_PROMPT")
    log.set_entity("prompt", body.id)
    log.set_payload(body.model_dump())
    return run_logged(log, lambda: svc.update(body.id, body.text))


@router.post("/api/prompts/delete")
def api_prompts_delete(body: IdBody, request: Request):
    svc = _svc(request)
    log = LogContext(svc.store, "DELETE_PROMPT")
    log.set_entity("prompt", body.id)

    def _delete():
        log.set_before(svc.get_by_id(body.id))
        return {"message": "ok", "responses_deleted": svc.delete(body.id)}

    return run_logged(log, _delete)
