"""Session protocol configuration (env names and defaults only)."""

from __future__ import annotations

ENV_SERVER_VERSION = "RELAY_SERVER_VERSION"
ENV_SESSION_URL_BASE = "RELAY_SESSION_URL_BASE"
ENV_NOTIFY_HOST_ON_JOIN = "RELAY_NOTIFY_HOST_ON_JOIN"
ENV_CLOSE_SESSION_ON_HOST_DISCONNECT = "RELAY_CLOSE_SESSION_ON_HOST_DISCONNECT"

DEFAULT_SERVER_VERSION = "1.0.0"

# Page the web client serves for joining; the session id rides in `?sid=`.
DEFAULT_SESSION_URL_BASE = "http://localhost:5173/client"
SESSION_URL_QUERY_KEY = "sid"

DEFAULT_NOTIFY_HOST_ON_JOIN = False
DEFAULT_CLOSE_SESSION_ON_HOST_DISCONNECT = False

USER_ID_PREFIX = "user_"

__all__ = [
    "ENV_SERVER_VERSION",
    "ENV_SESSION_URL_BASE",
    "ENV_NOTIFY_HOST_ON_JOIN",
    "ENV_CLOSE_SESSION_ON_HOST_DISCONNECT",
    "DEFAULT_SERVER_VERSION",
    "DEFAULT_SESSION_URL_BASE",
    "SESSION_URL_QUERY_KEY",
    "DEFAULT_NOTIFY_HOST_ON_JOIN",
    "DEFAULT_CLOSE_SESSION_ON_HOST_DISCONNECT",
    "USER_ID_PREFIX",
]
