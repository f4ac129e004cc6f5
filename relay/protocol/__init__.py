from .codec import decode, encode, type_name
from .envelope import (
    Params,
    Envelope,
    ServerInfo,
    WelcomeResponse,
    JoinSessionRequest,
    JoinSessionResponse,
    CreateSessionRequest,
    CreateSessionResponse,
)

__all__ = [
    "CreateSessionRequest",
    "CreateSessionResponse",
    "Envelope",
    "JoinSessionRequest",
    "JoinSessionResponse",
    "Params",
    "ServerInfo",
    "WelcomeResponse",
    "decode",
    "encode",
    "type_name",
]
