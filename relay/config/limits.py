"""Admission control and fan-out budget configuration (env names and defaults only)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "RELAY_MAX_CONCURRENT_CONNECTIONS"
ENV_PARAMS_WINDOW_SECONDS = "RELAY_PARAMS_WINDOW_SECONDS"
ENV_MAX_PARAMS_PER_WINDOW = "RELAY_MAX_PARAMS_PER_WINDOW"

DEFAULT_MAX_CONCURRENT_CONNECTIONS = 1000

# Params updates come from UI sliders, so a busy host can emit a few per second.
# 0 disables the budget.
DEFAULT_PARAMS_WINDOW_SECONDS = 60.0
DEFAULT_MAX_PARAMS_PER_WINDOW = 6000

__all__ = [
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_PARAMS_WINDOW_SECONDS",
    "ENV_MAX_PARAMS_PER_WINDOW",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_PARAMS_WINDOW_SECONDS",
    "DEFAULT_MAX_PARAMS_PER_WINDOW",
]
