"""Shared error types for the session relay."""

from __future__ import annotations

from dataclasses import dataclass


class EnvelopeDecodeError(ValueError):
    """Raised when a frame does not parse as a valid envelope."""


@dataclass(frozen=True, slots=True)
class SessionNotFoundError(Exception):
    """Raised when a join or fan-out names a session that was never created."""

    session_id: str


@dataclass(frozen=True, slots=True)
class HandshakeFailure(Exception):
    """Raised when the WebSocket upgrade for a new connection fails."""

    reason: str


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a connection has spent its Params fan-out budget."""

    retry_in: float
    limit: int
    window_seconds: float


__all__ = ["EnvelopeDecodeError", "HandshakeFailure", "RateLimitError", "SessionNotFoundError"]
