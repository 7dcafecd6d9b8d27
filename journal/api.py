"""
FastAPI app entry point: owns the Store for the process lifetime and
aggregates per-domain routers under journal/routes.
Keep as `uvicorn journal.api:app`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .db import Store, get_db_path
from .domain.clock import Clock
from .logs import LogContext, ensure_log_schema
from .seeds import seed_default_prompts
from .services.config_svc import ensure_default_config, get_config

logger = logging.getLogger(__name__)


def on_startup(app: FastAPI) -> Store:
    store = Store.open(get_db_path())
    app.state.store = store
    app.state.clock = Clock()
    ensure_log_schema(store)
    ensure_default_config(store)
    if get_config(store)["seed_default_prompts"]:
        try:
            seed_default_prompts(store, app.state.clock)
        except Exception as e:
            LogContext(store, "STARTUP").write("ERROR", f"seed_default_prompts_failed: {e}")
            raise
    logger.info("journal api ready (db=%s)", store.path)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = on_startup(app)
    try:
        yield
    finally:
        store.close()


app = FastAPI(title="reflection-journal-api", version="0.1.0", lifespan=lifespan)


# Include routers (split by journal family)
from .routes import base as base_routes
from .routes import prompts as prompts_routes
from .routes import responses as responses_routes
from .routes import affirmations as affirmations_routes
from .routes import gratitude as gratitude_routes
from .routes import creativity as creativity_routes
from .routes import activity as activity_routes
from .routes import settings as settings_routes
from .routes import logs as logs_routes
from .routes import maintenance as maintenance_routes

app.include_router(base_routes.router)
app.include_router(prompts_routes.router)
app.include_router(responses_routes.router)
app.include_router(affirmations_routes.router)
app.include_router(gratitude_routes.router)
app.include_router(creativity_routes.router)
app.include_router(activity_routes.router)
app.include_router(settings_routes.router)
app.include_router(logs_routes.router)
app.include_router(maintenance_routes.router)
