"""
api/main.py

FastAPI application factory.

The SessionStore and Settings are handed in by the caller (main.py or a
test) and parked on app.state; see api/deps.py.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from ..config import Settings, settings as default_settings
from ..metrics import METRICS
from ..storage import SessionStore
from .deps import get_store
from .routes import connections as connections_router
from .routes import files as files_router
from .routes import graph as graph_router
from .routes import stats as stats_router
from .routes import timeline as timeline_router

logger = logging.getLogger(__name__)


def create_app(
    store: SessionStore | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    cfg = app_settings if app_settings is not None else default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FastAPI startup — %d file(s) loaded", len(app.state.store))
        yield
        logger.info("FastAPI shutdown")

    app = FastAPI(
        title="zeekviz — Zeek connection log explorer",
        version="1.0.0",
        description="Graph, timeline and statistics views over uploaded Zeek conn.log files",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else SessionStore()
    app.state.settings = cfg

    if cfg.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cfg.CORS_ORIGINS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # REST routers
    app.include_router(files_router.router,       prefix="/api")
    app.include_router(connections_router.router, prefix="/api")
    app.include_router(graph_router.router,       prefix="/api")
    app.include_router(timeline_router.router,    prefix="/api")
    app.include_router(stats_router.router,       prefix="/api")

    @app.get("/health")
    async def health(request: Request) -> dict:
        return {
            "status": "ok",
            "total_files": len(get_store(request)),
            "ingest": METRICS.as_dict(),
        }

    if cfg.STATIC_DIR:
        _mount_static(app, Path(cfg.STATIC_DIR))

    return app


def _mount_static(app: FastAPI, static_dir: Path) -> None:
    """Serve a pre-built front-end: index.html at / and everything else under /static."""
    if not static_dir.is_dir():
        logger.warning("STATIC_DIR %s is not a directory — front-end not served", static_dir)
        return

    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    index = static_dir / "index.html"

    @app.get("/", include_in_schema=False)
    async def index_page() -> FileResponse:
        if not index.is_file():
            raise HTTPException(status_code=404, detail="index.html not found")
        return FileResponse(index)

    logger.info("Serving front-end from %s", static_dir)
