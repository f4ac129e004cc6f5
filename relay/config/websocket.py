"""WebSocket protocol configuration and constants."""

from __future__ import annotations

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_PAYLOAD = "payload"

# Endpoint
ENV_WS_ENDPOINT_PATH = "RELAY_WS_PATH"
DEFAULT_WS_ENDPOINT_PATH = "/ws"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_BUSY_REASON = "server at capacity"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"
WS_CLOSE_HOST_DISCONNECTED_REASON = "host disconnected"
WS_CLOSE_SHUTDOWN_REASON = "server shutting down"

# Watchdog (0 disables idle / max duration enforcement)
ENV_WS_IDLE_TIMEOUT_S = "RELAY_WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "RELAY_WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "RELAY_WS_MAX_CONNECTION_DURATION_S"

DEFAULT_WS_IDLE_TIMEOUT_S = 0.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 0.0

__all__ = [
    "WS_KEY_TYPE",
    "WS_KEY_PAYLOAD",
    "ENV_WS_ENDPOINT_PATH",
    "DEFAULT_WS_ENDPOINT_PATH",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_CLOSE_HOST_DISCONNECTED_REASON",
    "WS_CLOSE_SHUTDOWN_REASON",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
]
