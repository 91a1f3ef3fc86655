"""Tests for the connection registry and the per-user channel router."""

from __future__ import annotations

import pytest

from socialwire.infrastructure.realtime import ChannelRouter, Connection, ConnectionRegistry


def test_register_reports_only_the_first_connection(make_transport) -> None:
    registry = ConnectionRegistry()
    first = Connection(user_id=7, transport=make_transport())
    second = Connection(user_id=7, transport=make_transport())

    assert registry.register(first) is True
    assert registry.register(second) is False
    assert registry.is_online(7)
    assert registry.connections_for(7) == [first, second]
    assert len(registry) == 2


def test_unregister_reports_only_the_last_connection(make_transport) -> None:
    registry = ConnectionRegistry()
    first = Connection(user_id=7, transport=make_transport())
    second = Connection(user_id=7, transport=make_transport())
    registry.register(first)
    registry.register(second)

    assert registry.unregister(first) is False
    assert registry.is_online(7)
    assert registry.unregister(second) is True
    assert not registry.is_online(7)
    assert registry.online_user_ids() == set()


def test_unregister_unknown_connection_is_a_no_op(make_transport) -> None:
    registry = ConnectionRegistry()
    connection = Connection(user_id=1, transport=make_transport())

    assert registry.unregister(connection) is False
    registry.register(connection)
    assert registry.unregister(connection) is True
    assert registry.unregister(connection) is False


def test_register_same_connection_twice_raises(make_transport) -> None:
    registry = ConnectionRegistry()
    connection = Connection(user_id=1, transport=make_transport())
    registry.register(connection)

    with pytest.raises(RuntimeError):
        registry.register(connection)


def test_connections_for_returns_a_snapshot(make_transport) -> None:
    registry = ConnectionRegistry()
    connection = Connection(user_id=3, transport=make_transport())
    registry.register(connection)

    snapshot = registry.connections_for(3)
    registry.unregister(connection)

    assert snapshot == [connection]
    assert registry.connections_for(3) == []


def test_join_channel_twice_is_rejected(make_transport) -> None:
    router = ChannelRouter(ConnectionRegistry())
    connection = Connection(user_id=1, transport=make_transport())

    assert router.join_channel(connection) is True
    with pytest.raises(RuntimeError):
        router.join_channel(connection)


@pytest.mark.anyio
async def test_publish_reaches_every_connection_of_the_user(make_transport) -> None:
    registry = ConnectionRegistry()
    router = ChannelRouter(registry)
    tabs = [Connection(user_id=1, transport=make_transport()) for _ in range(2)]
    other = Connection(user_id=2, transport=make_transport())
    for connection in (*tabs, other):
        router.join_channel(connection)

    delivered = await router.publish(1, "notification", {"id": 9})

    assert delivered == 2
    for connection in tabs:
        assert connection.transport.sent == [{"type": "notification", "data": {"id": 9}}]
    assert other.transport.sent == []


@pytest.mark.anyio
async def test_publish_without_connections_is_silent() -> None:
    router = ChannelRouter(ConnectionRegistry())

    assert await router.publish(42, "dm", {"content": "hi"}) == 0


@pytest.mark.anyio
async def test_dead_transport_does_not_block_other_connections(make_transport, caplog) -> None:
    router = ChannelRouter(ConnectionRegistry())
    dead = Connection(user_id=1, transport=make_transport())
    alive = Connection(user_id=1, transport=make_transport())
    dead.transport.fail = True
    router.join_channel(dead)
    router.join_channel(alive)

    delivered = await router.publish(1, "presence", {"userId": 2, "isOnline": True})

    assert delivered == 1
    assert alive.transport.payloads("presence") == [{"userId": 2, "isOnline": True}]
    assert "transport rejected the send" in caplog.text


@pytest.mark.anyio
async def test_send_targets_a_single_connection(make_transport) -> None:
    router = ChannelRouter(ConnectionRegistry())
    first = Connection(user_id=1, transport=make_transport())
    second = Connection(user_id=1, transport=make_transport())
    router.join_channel(first)
    router.join_channel(second)

    assert await router.send(first, "pong", None) is True

    assert first.transport.sent == [{"type": "pong", "data": None}]
    assert second.transport.sent == []
