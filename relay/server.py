"""FastAPI application for the session relay."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from relay.state.settings import AppSettings
from relay.runtime.settings import load_settings
from relay.runtime.logging import configure_logging
from relay.runtime.dependencies import build_runtime_deps
from relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.runtime_deps = build_runtime_deps(settings)
        logger.info("runtime: ready, websocket endpoint at %s", settings.server.ws_path)
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket(settings.server.ws_path)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(websocket.app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


configure_logging()

app = create_app()

__all__ = ["app", "create_app"]
