"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_arcade.config import GameConfig
from snake_arcade.server.registry import SessionRegistry
from snake_arcade.server.routes import router, scores_router
from snake_arcade.server.websocket import ws_router
from snake_arcade.storage import KeyValueStore


def create_app(
    config: GameConfig | None = None, store: KeyValueStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.registry = SessionRegistry(config, store)
        yield
        await app.state.registry.cleanup()

    app = FastAPI(
        title="Snake Arcade API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(scores_router)
    app.include_router(ws_router)
    return app
