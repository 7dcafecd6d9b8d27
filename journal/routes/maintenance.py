from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..logs import LogContext
from ..services.config_svc import get_config
from ..services.export_svc import export_csv
from ..services.import_svc import import_csv
from .deps import get_clock, get_store, run_logged

router = APIRouter()


class ExportBody(BaseModel):
    out_dir: str | None = None


class ImportBody(BaseModel):
    in_dir: str | None = None


@router.post("/api/maintenance/export")
def api_maintenance_export(body: ExportBody, request: Request):
    store = get_store(request)
    out_dir = body.out_dir or get_config(store)["export_dir"]
    log = LogContext(store, "EXPORT_CSV")
    log.set_payload({"out_dir": out_dir})
    files = run_logged(log, lambda: export_csv(store, out_dir))
    return {"message": "ok", "files": files}


@router.post("/api/maintenance/import")
def api_maintenance_import(body: ImportBody, request: Request):
    """Load an export back in; any invalid row rejects the whole import."""
    store = get_store(request)
    in_dir = body.in_dir or get_config(store)["export_dir"]
    log = LogContext(store, "IMPORT_CSV")
    log.set_payload({"in_dir": in_dir})
    counts = run_logged(log, lambda: import_csv(store, in_dir, get_clock(request)))
    return {"message": "ok", "imported": counts}
