"""End-to-end tests for the realtime websocket endpoint."""

from __future__ import annotations

from datetime import timedelta

import pytest
from starlette.websockets import WebSocketDisconnect

from socialwire.infrastructure.database import SessionLocal
from socialwire.infrastructure.models import DirectMessageModel, UserModel
from socialwire.infrastructure.security import create_user_token


def _snapshot(online: list[int]) -> dict:
    return {"type": "presence:snapshot", "data": {"online": online}}


def _assert_nothing_pending(websocket) -> None:
    """A ping is answered after everything queued before it."""

    websocket.send_json({"type": "ping"})
    assert websocket.receive_json() == {"type": "pong", "data": None}


def test_direct_message_reaches_both_parties_then_only_the_sender(
    client, create_user, auth_headers, ws_url
) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")

    with client.websocket_connect(ws_url(alice)) as ws_alice:
        assert ws_alice.receive_json() == _snapshot([])

        with client.websocket_connect(ws_url(bob)) as ws_bob:
            assert ws_bob.receive_json() == _snapshot([])

            ws_alice.send_json({"type": "sendDirectMessage", "data": {"content": "hi", "to": bob}})
            delivered = ws_bob.receive_json()
            echoed = ws_alice.receive_json()

            assert delivered["type"] == "dm"
            assert echoed == delivered
            assert delivered["data"]["from"] == alice
            assert delivered["data"]["to"] == bob
            assert delivered["data"]["content"] == "hi"
            assert delivered["data"]["read"] is False
            assert delivered["data"]["createdAt"]
            first = delivered["data"]

        ws_alice.send_json({"type": "sendDirectMessage", "data": {"content": "still there?", "to": bob}})
        echoed = ws_alice.receive_json()
        assert echoed["type"] == "dm"
        assert echoed["data"]["content"] == "still there?"
        second = echoed["data"]
        _assert_nothing_pending(ws_alice)

    with SessionLocal() as session:
        rows = session.query(DirectMessageModel).order_by(DirectMessageModel.id).all()
        assert [(row.sender_id, row.recipient_id, row.content) for row in rows] == [
            (alice, bob, "hi"),
            (alice, bob, "still there?"),
        ]

    history = client.get(f"/messages/{alice}", headers=auth_headers(bob))
    assert history.status_code == 200
    assert [message["content"] for message in history.json()] == ["hi", "still there?"]
    assert [(message["id"], message["created_at"]) for message in history.json()] == [
        (first["id"], first["createdAt"]),
        (second["id"], second["createdAt"]),
    ]


@pytest.mark.parametrize(
    "token_factory",
    [
        lambda user_id: None,
        lambda user_id: "garbage",
        lambda user_id: create_user_token(user_id, expires_delta=timedelta(seconds=-1)),
    ],
)
def test_handshake_without_valid_token_is_refused(client, create_user, token_factory) -> None:
    user_id = create_user()
    token = token_factory(user_id)
    url = "/ws" if token is None else f"/ws?token={token}"

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(url):
            pass

    assert exc_info.value.code == 1008
    assert not client.app.state.realtime.is_online(user_id)


def test_token_can_be_sent_as_bearer_header_or_cookie(client, create_user) -> None:
    user_id = create_user()
    token = create_user_token(user_id)

    with client.websocket_connect("/ws", headers={"Authorization": f"Bearer {token}"}) as ws:
        assert ws.receive_json() == _snapshot([])

    with client.websocket_connect("/ws", headers={"Cookie": f"authToken={token}"}) as ws:
        assert ws.receive_json() == _snapshot([])


def test_friends_see_each_other_come_and_go(
    client, create_user, befriend, auth_headers, ws_url
) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")
    carol = create_user("Carol")
    befriend(alice, bob)

    with client.websocket_connect(ws_url(alice)) as ws_alice, client.websocket_connect(
        ws_url(carol)
    ) as ws_carol:
        assert ws_alice.receive_json() == _snapshot([])
        assert ws_carol.receive_json() == _snapshot([])

        with client.websocket_connect(ws_url(bob)) as ws_bob:
            assert ws_bob.receive_json() == _snapshot([alice])
            assert ws_alice.receive_json() == {
                "type": "presence",
                "data": {"userId": bob, "isOnline": True},
            }

            presence = client.get("/presence/", headers=auth_headers(alice))
            assert [(entry["id"], entry["is_online"]) for entry in presence.json()] == [
                (bob, True)
            ]

        offline = ws_alice.receive_json()
        assert offline["type"] == "presence"
        assert offline["data"]["userId"] == bob
        assert offline["data"]["isOnline"] is False
        assert offline["data"]["lastSeen"]

        _assert_nothing_pending(ws_carol)

    with SessionLocal() as session:
        assert session.get(UserModel, bob).last_seen is not None


def test_second_tab_does_not_repeat_presence(client, create_user, befriend, ws_url) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")
    befriend(alice, bob)

    with client.websocket_connect(ws_url(alice)) as ws_alice:
        ws_alice.receive_json()
        with client.websocket_connect(ws_url(bob)) as first_tab:
            first_tab.receive_json()
            assert ws_alice.receive_json()["data"] == {"userId": bob, "isOnline": True}

            with client.websocket_connect(ws_url(bob)) as second_tab:
                assert second_tab.receive_json() == _snapshot([alice])
            _assert_nothing_pending(ws_alice)

            ws_alice.send_json({"type": "dm", "content": "both tabs?", "to": bob})
            assert first_tab.receive_json()["data"]["content"] == "both tabs?"

        assert ws_alice.receive_json()["type"] == "dm"
        assert ws_alice.receive_json()["data"]["isOnline"] is False


def test_rejected_message_is_reported_to_the_sender_only(client, create_user, ws_url) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")

    with client.websocket_connect(ws_url(alice)) as ws_alice, client.websocket_connect(
        ws_url(bob)
    ) as ws_bob:
        ws_alice.receive_json()
        ws_bob.receive_json()

        ws_alice.send_json({"type": "sendDirectMessage", "data": {"content": "   ", "to": bob, "ref": 1}})
        assert ws_alice.receive_json() == {
            "type": "dm:error",
            "data": {"ref": 1, "code": "empty_content", "detail": "Message content is empty"},
        }

        ws_alice.send_json({"type": "sendDirectMessage", "data": {"content": "hi", "to": 9999, "ref": 2}})
        error = ws_alice.receive_json()
        assert error["type"] == "dm:error"
        assert error["data"]["code"] == "persistence_failed"
        assert error["data"]["ref"] == 2

        _assert_nothing_pending(ws_bob)

    with SessionLocal() as session:
        assert session.query(DirectMessageModel).count() == 0


def test_non_json_frames_keep_the_connection_open(client, create_user, ws_url) -> None:
    user_id = create_user()

    with client.websocket_connect(ws_url(user_id)) as ws:
        ws.receive_json()
        ws.send_text("not json")
        error = ws.receive_json()
        assert error["type"] == "error"
        assert error["data"]["code"] == "invalid_message"

        ws.send_json({"type": "wave"})
        assert ws.receive_json()["data"]["code"] == "unknown_event"
        _assert_nothing_pending(ws)


def test_accepting_while_both_online_exchanges_presence(
    client, create_user, auth_headers, ws_url
) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")

    with client.websocket_connect(ws_url(alice)) as ws_alice:
        assert ws_alice.receive_json() == _snapshot([])

        with client.websocket_connect(ws_url(bob)) as ws_bob:
            assert ws_bob.receive_json() == _snapshot([])
            _assert_nothing_pending(ws_alice)

            client.post(f"/friends/request/{bob}", headers=auth_headers(alice))
            assert ws_bob.receive_json()["data"]["kind"] == "friend_request"

            response = client.post(f"/friends/accept/{alice}", headers=auth_headers(bob))
            assert response.status_code == 200

            assert ws_alice.receive_json()["data"]["kind"] == "friend_accept"
            assert ws_alice.receive_json() == {
                "type": "presence",
                "data": {"userId": bob, "isOnline": True},
            }
            assert ws_bob.receive_json() == {
                "type": "presence",
                "data": {"userId": alice, "isOnline": True},
            }
            _assert_nothing_pending(ws_bob)

        offline = ws_alice.receive_json()
        assert offline["data"]["userId"] == bob
        assert offline["data"]["isOnline"] is False
