# -*- coding: utf-8 -*-
"""
Fitaura ledger API

Activity streaks, meal/macro tracking against goals and sleep recovery
history, with the AI coach wired in as an external collaborator.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .activity.api import router as activity_router
from .coach.api import router as coach_router
from .config import settings
from .ledger import open_ledger
from .nutrition.api import router as nutrition_router
from .recovery.api import router as recovery_router

logger = logging.getLogger(__name__)


def create_app(data_root: Path | None = None) -> FastAPI:
    app = FastAPI(
        title="Fitaura Ledger",
        description="Activity streaks, nutrition goals and recovery history",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Loaded once; every mutation writes through to disk.
    app.state.ledger = open_ledger(data_root)
    logger.info("Ledger opened at %s", app.state.ledger.store.root)

    app.include_router(activity_router)
    app.include_router(nutrition_router)
    app.include_router(recovery_router)
    app.include_router(coach_router)

    @app.get("/api/health")
    def health() -> dict:
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("fitaura.api:app", host=settings.host, port=settings.port, reload=False)
