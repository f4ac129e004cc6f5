"""Binary-frame codec for relay envelopes.

Wire form is a JSON object, serialized with orjson and carried in a binary
WebSocket frame:

    {"type": "<variant>", "payload": {...}}

Missing payload fields take their zero value ("", 0, false), so peers may omit
defaults. Unknown payload keys are ignored.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

import orjson

from relay.errors import EnvelopeDecodeError
from relay.config.websocket import WS_KEY_TYPE, WS_KEY_PAYLOAD

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

MSG_WELCOME_RESPONSE = "welcome_response"
MSG_CREATE_SESSION_REQUEST = "create_session_request"
MSG_CREATE_SESSION_RESPONSE = "create_session_response"
MSG_JOIN_SESSION_REQUEST = "join_session_request"
MSG_JOIN_SESSION_RESPONSE = "join_session_response"
MSG_PARAMS = "params"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_TYPE_NAMES: dict[type, str] = {
    WelcomeResponse: MSG_WELCOME_RESPONSE,
    CreateSessionRequest: MSG_CREATE_SESSION_REQUEST,
    CreateSessionResponse: MSG_CREATE_SESSION_RESPONSE,
    JoinSessionRequest: MSG_JOIN_SESSION_REQUEST,
    JoinSessionResponse: MSG_JOIN_SESSION_RESPONSE,
    Params: MSG_PARAMS,
}


def _get_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EnvelopeDecodeError(f"'{key}' must be a string")
    return value


def _get_bool(payload: dict[str, Any], key: str) -> bool:
    value = payload.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise EnvelopeDecodeError(f"'{key}' must be a boolean")
    return value


def _get_int32(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise EnvelopeDecodeError(f"'{key}' must be an integer")
    if value < _INT32_MIN or value > _INT32_MAX:
        raise EnvelopeDecodeError(f"'{key}' is out of int32 range")
    return value


def _get_object(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise EnvelopeDecodeError(f"'{key}' must be an object")
    return value


def _decode_welcome(payload: dict[str, Any]) -> WelcomeResponse:
    info = _get_object(payload, "server_info")
    return WelcomeResponse(
        user_id=_get_str(payload, "user_id"),
        server_info=ServerInfo(version=_get_str(info, "version")),
    )


def _decode_create_request(_payload: dict[str, Any]) -> CreateSessionRequest:
    return CreateSessionRequest()


def _decode_create_response(payload: dict[str, Any]) -> CreateSessionResponse:
    return CreateSessionResponse(
        accepted=_get_bool(payload, "accepted"),
        session_url=_get_str(payload, "session_url"),
    )


def _decode_join_request(payload: dict[str, Any]) -> JoinSessionRequest:
    return JoinSessionRequest(sid=_get_str(payload, "sid"))


def _decode_join_response(payload: dict[str, Any]) -> JoinSessionResponse:
    return JoinSessionResponse(accepted=_get_bool(payload, "accepted"))


def _decode_params(payload: dict[str, Any]) -> Params:
    return Params(
        size=_get_int32(payload, "size"),
        speed=_get_int32(payload, "speed"),
        color=_get_str(payload, "color"),
        sid=_get_str(payload, "sid"),
    )


_DECODERS: dict[str, Callable[[dict[str, Any]], Envelope]] = {
    MSG_WELCOME_RESPONSE: _decode_welcome,
    MSG_CREATE_SESSION_REQUEST: _decode_create_request,
    MSG_CREATE_SESSION_RESPONSE: _decode_create_response,
    MSG_JOIN_SESSION_REQUEST: _decode_join_request,
    MSG_JOIN_SESSION_RESPONSE: _decode_join_response,
    MSG_PARAMS: _decode_params,
}


def type_name(envelope: Envelope) -> str:
    try:
        return _TYPE_NAMES[type(envelope)]
    except KeyError:
        raise TypeError(f"not an envelope variant: {type(envelope).__name__}") from None


def encode(envelope: Envelope) -> bytes:
    # orjson serializes dataclasses (nested ones included) natively.
    return orjson.dumps({WS_KEY_TYPE: type_name(envelope), WS_KEY_PAYLOAD: envelope})


def decode(data: bytes) -> Envelope:
    try:
        msg = orjson.loads(data)
    except orjson.JSONDecodeError as exc:
        raise EnvelopeDecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise EnvelopeDecodeError("envelope must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise EnvelopeDecodeError("envelope missing non-empty 'type'")

    decoder = _DECODERS.get(msg_type.strip())
    if decoder is None:
        raise EnvelopeDecodeError(f"unknown envelope type '{msg_type}'")

    payload = msg.get(WS_KEY_PAYLOAD)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise EnvelopeDecodeError("envelope 'payload' must be an object")

    return decoder(payload)


__all__ = [
    "MSG_CREATE_SESSION_REQUEST",
    "MSG_CREATE_SESSION_RESPONSE",
    "MSG_JOIN_SESSION_REQUEST",
    "MSG_JOIN_SESSION_RESPONSE",
    "MSG_PARAMS",
    "MSG_WELCOME_RESPONSE",
    "decode",
    "encode",
    "type_name",
]
