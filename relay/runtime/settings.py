"""Environment parsing for runtime settings.

Names and defaults are declared in `relay/config/*`; this module resolves them
into the frozen dataclasses in `relay/state/settings.py`.
"""

from __future__ import annotations

import os

from relay.config.server import ENV_HOST, ENV_PORT, DEFAULT_HOST, DEFAULT_PORT
from relay.state.settings import (
    AppSettings,
    LimitsSettings,
    ServerSettings,
    SessionSettings,
    WebSocketSettings,
)
from relay.config.limits import (
    ENV_PARAMS_WINDOW_SECONDS,
    ENV_MAX_PARAMS_PER_WINDOW,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_PARAMS_WINDOW_SECONDS,
    DEFAULT_MAX_PARAMS_PER_WINDOW,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
)
from relay.config.sessions import (
    ENV_SERVER_VERSION,
    ENV_SESSION_URL_BASE,
    DEFAULT_SERVER_VERSION,
    ENV_NOTIFY_HOST_ON_JOIN,
    DEFAULT_SESSION_URL_BASE,
    DEFAULT_NOTIFY_HOST_ON_JOIN,
    ENV_CLOSE_SESSION_ON_HOST_DISCONNECT,
    DEFAULT_CLOSE_SESSION_ON_HOST_DISCONNECT,
)
from relay.config.websocket import (
    ENV_WS_ENDPOINT_PATH,
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_ENDPOINT_PATH,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _load_server_settings() -> ServerSettings:
    port = _int_env(ENV_PORT, DEFAULT_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_PORT
    ws_path = _str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)
    if not ws_path.startswith("/"):
        ws_path = f"/{ws_path}"
    return ServerSettings(host=_str_env(ENV_HOST, DEFAULT_HOST), port=port, ws_path=ws_path)


def _load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    window = _float_env(ENV_PARAMS_WINDOW_SECONDS, DEFAULT_PARAMS_WINDOW_SECONDS)
    limit = _int_env(ENV_MAX_PARAMS_PER_WINDOW, DEFAULT_MAX_PARAMS_PER_WINDOW)
    return LimitsSettings(
        max_concurrent_connections=max(1, max_connections),
        params_window_seconds=max(0.0, window),
        max_params_per_window=max(0, limit),
    )


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        idle_timeout_s=max(0.0, _float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S)),
        watchdog_tick_s=_float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S) or DEFAULT_WS_WATCHDOG_TICK_S,
        max_connection_duration_s=max(
            0.0, _float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S)
        ),
    )


def _load_session_settings() -> SessionSettings:
    return SessionSettings(
        server_version=_str_env(ENV_SERVER_VERSION, DEFAULT_SERVER_VERSION),
        session_url_base=_str_env(ENV_SESSION_URL_BASE, DEFAULT_SESSION_URL_BASE),
        notify_host_on_join=_bool_env(ENV_NOTIFY_HOST_ON_JOIN, DEFAULT_NOTIFY_HOST_ON_JOIN),
        close_session_on_host_disconnect=_bool_env(
            ENV_CLOSE_SESSION_ON_HOST_DISCONNECT, DEFAULT_CLOSE_SESSION_ON_HOST_DISCONNECT
        ),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        server=_load_server_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        sessions=_load_session_settings(),
    )


__all__ = ["load_settings"]
