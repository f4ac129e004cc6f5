from __future__ import annotations

import orjson
import pytest

from relay.errors import EnvelopeDecodeError
from relay.protocol import (
    Params,
    ServerInfo,
    WelcomeResponse,
    JoinSessionRequest,
    JoinSessionResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    decode,
    encode,
)


def test_encode_uses_type_and_payload_keys() -> None:
    data = encode(Params(size=1, speed=2, color="blue", sid="abc"))
    assert orjson.loads(data) == {
        "type": "params",
        "payload": {"size": 1, "speed": 2, "color": "blue", "sid": "abc"},
    }


def test_encode_nested_welcome() -> None:
    data = encode(WelcomeResponse(user_id="user_3", server_info=ServerInfo(version="1.0.0")))
    assert orjson.loads(data) == {
        "type": "welcome_response",
        "payload": {"user_id": "user_3", "server_info": {"version": "1.0.0"}},
    }


def test_encode_empty_request() -> None:
    assert orjson.loads(encode(CreateSessionRequest())) == {"type": "create_session_request", "payload": {}}


def test_decode_fills_missing_fields_with_defaults() -> None:
    assert decode(b'{"type": "params", "payload": {"sid": "s1"}}') == Params(sid="s1")
    assert decode(b'{"type": "join_session_request"}') == JoinSessionRequest(sid="")
    assert decode(b'{"type": "join_session_response", "payload": null}') == JoinSessionResponse(accepted=False)


def test_decode_create_session_response() -> None:
    raw = b'{"type": "create_session_response", "payload": {"accepted": true, "session_url": "http://h/client?sid=q"}}'
    assert decode(raw) == CreateSessionResponse(accepted=True, session_url="http://h/client?sid=q")


def test_decode_ignores_unknown_payload_keys() -> None:
    env = decode(b'{"type": "params", "payload": {"sid": "s1", "size": 3, "opacity": 0.5}}')
    assert env == Params(size=3, sid="s1")


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"[]",
        b'{"payload": {}}',
        b'{"type": "", "payload": {}}',
        b'{"type": "error", "payload": {}}',
        b'{"type": "params", "payload": []}',
        b'{"type": "params", "payload": {"size": "big"}}',
        b'{"type": "params", "payload": {"size": 1.5}}',
        b'{"type": "params", "payload": {"speed": true}}',
        b'{"type": "params", "payload": {"size": 2147483648}}',
        b'{"type": "params", "payload": {"color": 3}}',
        b'{"type": "join_session_request", "payload": {"sid": 42}}',
        b'{"type": "create_session_response", "payload": {"accepted": "yes"}}',
        b'{"type": "welcome_response", "payload": {"server_info": "1.0.0"}}',
    ],
)
def test_decode_rejects_invalid_frames(raw: bytes) -> None:
    with pytest.raises(EnvelopeDecodeError):
        decode(raw)


def test_decode_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        decode(b"\xff\xfe")
