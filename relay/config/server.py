"""Listener configuration (env names and defaults only)."""

from __future__ import annotations

ENV_HOST = "RELAY_HOST"
ENV_PORT = "RELAY_PORT"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000

__all__ = ["ENV_HOST", "ENV_PORT", "DEFAULT_HOST", "DEFAULT_PORT"]
