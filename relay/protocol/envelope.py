"""Envelope variants exchanged over the relay WebSocket (dataclasses only).

Each frame carries exactly one variant. There is no request id: a response is
matched to its request by arriving on the same connection, in send order.
"""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ServerInfo:
    version: str = ""


@dataclass(frozen=True, slots=True)
class WelcomeResponse:
    user_id: str = ""
    server_info: ServerInfo = field(default_factory=ServerInfo)


@dataclass(frozen=True, slots=True)
class CreateSessionRequest:
    pass


@dataclass(frozen=True, slots=True)
class CreateSessionResponse:
    accepted: bool = False
    session_url: str = ""


@dataclass(frozen=True, slots=True)
class JoinSessionRequest:
    sid: str = ""


@dataclass(frozen=True, slots=True)
class JoinSessionResponse:
    accepted: bool = False


@dataclass(frozen=True, slots=True)
class Params:
    size: int = 0
    speed: int = 0
    color: str = ""
    sid: str = ""


Envelope = Union[
    WelcomeResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    JoinSessionRequest,
    JoinSessionResponse,
    Params,
]

__all__ = [
    "CreateSessionRequest",
    "CreateSessionResponse",
    "Envelope",
    "JoinSessionRequest",
    "JoinSessionResponse",
    "Params",
    "ServerInfo",
    "WelcomeResponse",
]
