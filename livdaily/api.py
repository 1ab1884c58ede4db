# -*- coding: utf-8 -*-
"""
LivDaily API

Per-module wellness content, AI content generation and period-bounded stats.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .app_db import init_app_db
from .errors import Unauthenticated, register_error_handlers
from .auth.api import router as auth_router
from .auth.security import get_current_owner_from_request
from .analytics.api import router as analytics_router
from .content.api import router as content_router
from .daily.api import router as daily_router
from .generation.api import router as generation_router
from .journal.api import router as journal_router
from .user.api import router as user_router

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="LivDaily API",
    description="Wellness modules, AI content generation and analytics",
    version="1.0.0",
    docs_url="/v1/docs",
    redoc_url="/v1/redoc",
    openapi_url="/v1/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PATHS = (
    "/v1/auth/anonymous",
    "/v1/health",
    "/v1/docs",
    "/v1/redoc",
    "/v1/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if (
        request.method != "OPTIONS"
        and path.startswith("/v1")
        and not any(path.startswith(p) for p in _AUTH_EXEMPT_PATHS)
    ):
        try:
            request.state.owner_id = get_current_owner_from_request(request)
        except Unauthenticated as exc:
            return JSONResponse(status_code=exc.status_code, content=exc.to_body())
    return await call_next(request)


app.include_router(auth_router)
app.include_router(user_router)
app.include_router(generation_router)
app.include_router(analytics_router)
app.include_router(journal_router)
app.include_router(daily_router)
app.include_router(content_router)


@app.get("/v1/health")
def health_check():
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("LIVDAILY_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("LIVDAILY_PORT") or os.environ.get("PORT") or "3000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 3000

    uvicorn.run("livdaily.api:app", host=host, port=port, reload=False)
