"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from arena.api.dependencies import set_gateway
from arena.api.gateway import SessionGateway
from arena.api.routes import api_router
from arena.config import ArenaConfig
from arena.engine.game_engine import GameEngine
from arena.engine.scheduler import TickScheduler
from arena.utils.logging import setup_logging

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"


def create_app(config: ArenaConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = ArenaConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        engine = GameEngine(_config)
        gateway = SessionGateway(engine)
        scheduler = TickScheduler(engine, gateway.publish)
        app.state.gateway = gateway
        app.state.scheduler = scheduler
        set_gateway(gateway)
        scheduler.start()
        logger.info("Arena server started (%s mode).", _config.combat_mode.value)
        try:
            yield
        finally:
            await scheduler.stop()
            set_gateway(None)
            logger.info("Arena server shutting down.")

    app = FastAPI(
        title="Arena Game Server",
        description=(
            "Authoritative server for a real-time multiplayer arena.\n\n"
            "Clients connect to `/ws` and exchange JSON `{type, data}` text frames."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(api_router)

    # Serve the browser client when it is shipped alongside the server
    if FRONTEND_DIR.exists():
        app.mount("/", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="frontend")

    return app
