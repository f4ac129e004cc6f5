"""Runtime dependency construction (registries + router)."""

from __future__ import annotations

import logging

from relay.state import RuntimeDeps
from relay.state.settings import AppSettings
from relay.handlers.limits import FanOutThrottle
from relay.handlers.sessions import SessionRegistry
from relay.handlers.websocket.router import MessageRouter
from relay.handlers.connections import ConnectionRegistry

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    connections = ConnectionRegistry(max_connections=settings.limits.max_concurrent_connections)
    sessions = SessionRegistry()
    throttle = FanOutThrottle(
        max_per_window=settings.limits.max_params_per_window,
        window_seconds=settings.limits.params_window_seconds,
    )
    router = MessageRouter(
        connections=connections,
        sessions=sessions,
        settings=settings.sessions,
        throttle=throttle,
    )

    logger.debug("runtime: built with settings %s", settings)
    return RuntimeDeps(
        connections=connections,
        sessions=sessions,
        router=router,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
