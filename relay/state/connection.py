"""Per-connection registry entry (dataclasses only)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from dataclasses import dataclass

if TYPE_CHECKING:
    from relay.handlers.websocket.sender import ConnectionSender


@dataclass(frozen=True, slots=True)
class Connection:
    connection_id: int
    sender: ConnectionSender
    receiver: Any


__all__ = ["Connection"]
