from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from relay.runtime.dependencies import build_runtime_deps
from relay.handlers.websocket.sender import ConnectionSender
from relay.handlers.websocket.manager import handle_websocket_connection
from relay.protocol import (
    Params,
    ServerInfo,
    WelcomeResponse,
    JoinSessionRequest,
    CreateSessionRequest,
    CreateSessionResponse,
    decode,
    encode,
)
from tests.utils.fakes import FakeWebSocket, make_settings


async def _wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.mark.asyncio
async def test_welcome_is_first_frame_and_cleanup_runs() -> None:
    deps = build_runtime_deps(make_settings(max_connections=1))
    ws = FakeWebSocket()
    ws.push_bytes(encode(CreateSessionRequest()))
    ws.push_disconnect()

    await asyncio.wait_for(handle_websocket_connection(ws, deps), timeout=1.0)

    assert ws.accepted
    frames = [decode(frame) for frame in ws.sent]
    assert frames[0] == WelcomeResponse(user_id="user_0", server_info=ServerInfo(version="1.0.0"))
    assert isinstance(frames[1], CreateSessionResponse)
    assert deps.connections.get_connection_count() == 0
    # Admission slot was handed back.
    assert await deps.connections.admit()


@pytest.mark.asyncio
async def test_disconnect_purges_member_from_sessions() -> None:
    deps = build_runtime_deps(make_settings())
    host_ws = FakeWebSocket()
    host = await deps.connections.register(ConnectionSender(host_ws), host_ws)
    sid = await deps.sessions.create_session(host)

    client_ws = FakeWebSocket()
    client_ws.push_bytes(encode(JoinSessionRequest(sid=sid)))
    client_ws.push_disconnect()
    await asyncio.wait_for(handle_websocket_connection(client_ws, deps), timeout=1.0)

    assert await deps.sessions.members(sid) == []
    # Session itself survives: the host is still around.
    assert (await deps.sessions.get(sid)).host_id == host


@pytest.mark.asyncio
async def test_connection_refused_at_capacity() -> None:
    deps = build_runtime_deps(make_settings(max_connections=1))
    assert await deps.connections.admit()

    ws = FakeWebSocket()
    await asyncio.wait_for(handle_websocket_connection(ws, deps), timeout=1.0)

    assert not ws.accepted
    assert ws.close_code == 4002
    assert ws.sent == []
    assert deps.connections.get_connection_count() == 0


@pytest.mark.asyncio
async def test_handshake_failure_is_contained() -> None:
    deps = build_runtime_deps(make_settings(max_connections=1))
    ws = FakeWebSocket(fail_accept=True)

    await asyncio.wait_for(handle_websocket_connection(ws, deps), timeout=1.0)

    assert ws.sent == []
    assert deps.connections.get_connection_count() == 0
    assert await deps.connections.admit()


@pytest.mark.asyncio
async def test_host_disconnect_keeps_session_by_default() -> None:
    deps = build_runtime_deps(make_settings())
    client_ws = FakeWebSocket()
    client = await deps.connections.register(ConnectionSender(client_ws), client_ws)

    host_ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(host_ws, deps))
    host_ws.push_bytes(encode(CreateSessionRequest()))
    await _wait_until(lambda: len(host_ws.sent) == 2)
    sid = decode(host_ws.sent[1]).session_url.split("?sid=", 1)[1]
    await deps.sessions.join_session(client, sid)

    host_ws.push_disconnect()
    await asyncio.wait_for(task, timeout=1.0)

    assert not client_ws.closed.is_set()
    assert await deps.sessions.members(sid) == [client]


@pytest.mark.asyncio
async def test_host_disconnect_closes_session_when_enabled() -> None:
    deps = build_runtime_deps(make_settings(close_session_on_host_disconnect=True))
    client_ws = FakeWebSocket()
    client = await deps.connections.register(ConnectionSender(client_ws), client_ws)

    host_ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(host_ws, deps))
    host_ws.push_bytes(encode(CreateSessionRequest()))
    await _wait_until(lambda: len(host_ws.sent) == 2)
    sid = decode(host_ws.sent[1]).session_url.split("?sid=", 1)[1]
    await deps.sessions.join_session(client, sid)

    host_ws.push_disconnect()
    await asyncio.wait_for(task, timeout=1.0)

    assert client_ws.close_code == 1000
    assert client_ws.close_reason == "host disconnected"
    assert await deps.sessions.get(sid) is None


@pytest.mark.asyncio
async def test_shutdown_closes_open_connections() -> None:
    deps = build_runtime_deps(make_settings())
    ws = FakeWebSocket()
    await deps.connections.register(ConnectionSender(ws), ws)

    await deps.shutdown()

    assert ws.close_code == 1001
    assert ws.close_reason == "server shutting down"


@pytest.mark.asyncio
async def test_passive_member_receiving_params_is_not_idle() -> None:
    deps = build_runtime_deps(make_settings(idle_timeout_s=0.1, watchdog_tick_s=0.01))
    host_ws = FakeWebSocket()
    host = await deps.connections.register(ConnectionSender(host_ws), host_ws)
    sid = await deps.sessions.create_session(host)

    member_ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(member_ws, deps))
    member_ws.push_bytes(encode(JoinSessionRequest(sid=sid)))
    await _wait_until(lambda: len(member_ws.sent) == 2)

    # The member never sends again; relayed Params alone keep it alive.
    params = Params(size=1, sid=sid)
    for _ in range(15):
        await deps.router.route(host, params, encode(params))
        await asyncio.sleep(0.02)

    assert not member_ws.closed.is_set()
    assert len(member_ws.sent) == 2 + 15

    # Once the relay stops, the idle timeout applies as usual.
    await asyncio.wait_for(member_ws.closed.wait(), timeout=1.0)
    assert member_ws.close_code == 4000
    await asyncio.wait_for(task, timeout=1.0)
    assert deps.connections.get_connection_count() == 1
