from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..logs import LogContext
from ..services.config_svc import get_config, update_config
from .deps import get_store, run_logged

router = APIRouter()


@router.get("/api/settings/get")
def api_settings_get(request: Request):
    return get_config(get_store(request))


class SettingsUpdateBody(BaseModel):
    updates: dict


@router.post("/api/settings/update")
def api_settings_update(body: SettingsUpdateBody, request: Request):
    store = get_store(request)
    log = LogContext(store, "SETTINGS_UPDATE")
    log.set_payload(body.model_dump())
    updated_keys = run_logged(log, lambda: update_config(store, body.updates, log))
    return {"message": "ok", "updated": updated_keys}
