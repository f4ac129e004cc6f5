"""Session state (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Session:
    session_id: str
    host_id: int
    # Cumulative: a connection that joins twice is listed twice.
    members: list[int] = field(default_factory=list)


__all__ = ["Session"]
