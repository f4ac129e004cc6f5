"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    ws_path: str


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    params_window_seconds: float
    max_params_per_window: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class SessionSettings:
    server_version: str
    session_url_base: str
    notify_host_on_join: bool
    close_session_on_host_disconnect: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    server: ServerSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    sessions: SessionSettings


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "ServerSettings",
    "SessionSettings",
    "WebSocketSettings",
]
