from __future__ import annotations

from fastapi import APIRouter, Query, Request

from ..services.activity_svc import ActivityService
from .deps import DATE_PATTERN, get_clock, get_store, run_read

router = APIRouter()


@router.get("/api/activity/daily")
def api_activity_daily(
    request: Request,
    start: str | None = Query(None, pattern=DATE_PATTERN),
    end: str | None = Query(None, pattern=DATE_PATTERN),
):
    svc = ActivityService(get_store(request), get_clock(request))
    return {"items": run_read(lambda: svc.daily_activity(start, end))}


@router.get("/api/activity/summary")
def api_activity_summary(request: Request):
    return ActivityService(get_store(request), get_clock(request)).summary()
