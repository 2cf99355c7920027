import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime, timezone

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app
from app.models.message import Message
from app.realtime.delivery import BroadcastAll, RecipientOnly
from app.realtime.relay import MessageRelay
from app.realtime.server import room_for_email
from tests.helpers import session_factory_for


class FakeServer:
    """
    Stands in for socketio.AsyncServer: tracks rooms per sid and records what
    each connected sid would receive.
    """

    def __init__(self):
        self.rooms: dict[str, set[str]] = {}
        self.received: dict[str, list[tuple[str, dict]]] = {}

    def connect(self, sid: str):
        self.rooms[sid] = {sid}
        self.received[sid] = []

    async def enter_room(self, sid, room, namespace=None):
        self.rooms[sid].add(room)

    async def emit(self, event, data=None, to=None, **kwargs):
        if to is None:
            targets = list(self.rooms)
        else:
            wanted = {to} if isinstance(to, str) else set(to)
            targets = [sid for sid, rooms in self.rooms.items() if rooms & wanted]
        for sid in targets:
            self.received[sid].append((event, data))


def make_relay(db_session, policy=None):
    server = FakeServer()
    relay = MessageRelay(server, session_factory_for(db_session), policy or BroadcastAll())
    return server, relay


def connect(server, relay, sid, email=None):
    server.connect(sid)
    auth = {"email": email} if email else None
    asyncio.run(relay.on_connect(sid, {}, auth))


PRIVATE_HI = {
    "username": "alice",
    "content": "hi",
    "department": "eng",
    "recipient_email": "bob@x.com",
    "is_private": True,
}


def test_message_is_stored_and_listed_with_server_timestamp(db_session):
    """Test a relayed message shows up in history with a receipt timestamp"""
    server, relay = make_relay(db_session)
    connect(server, relay, "sid-a")

    sent_at = datetime.now(timezone.utc)
    asyncio.run(relay.on_send_message("sid-a", {"username": "alice", "content": "hello", "department": "eng"}))

    client = TestClient(app)
    r = client.get("/api/messages")
    assert r.status_code == 200
    messages = r.json()
    assert len(messages) == 1
    assert messages[0]["username"] == "alice"
    assert messages[0]["content"] == "hello"
    assert messages[0]["is_private"] is False
    assert messages[0]["timestamp"].endswith("Z")
    stored = datetime.fromisoformat(messages[0]["timestamp"].replace("Z", "+00:00"))
    assert stored >= sent_at


def test_broadcast_all_ignores_private_flag(db_session):
    """Test both clients receive a private message under BroadcastAll"""
    server, relay = make_relay(db_session, BroadcastAll())
    connect(server, relay, "sid-a", "alice@x.com")
    connect(server, relay, "sid-b")

    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    for sid in ("sid-a", "sid-b"):
        assert len(server.received[sid]) == 1
        event, payload = server.received[sid][0]
        assert event == "receiveMessage"
        assert payload["content"] == "hi"
        assert payload["recipient_email"] == "bob@x.com"
        assert payload["is_private"] is True
        assert payload["timestamp"]


def test_broadcast_payload_fields(db_session):
    """Test the broadcast carries the six inbound fields plus timestamp"""
    fixed = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    server = FakeServer()
    relay = MessageRelay(server, session_factory_for(db_session), BroadcastAll(), clock=lambda: fixed)
    connect(server, relay, "sid-a")

    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    _, payload = server.received["sid-a"][0]
    assert payload == {
        "username": "alice",
        "content": "hi",
        "timestamp": "2026-03-01T12:00:00Z",
        "department": "eng",
        "recipient_email": "bob@x.com",
        "is_private": True,
    }


def test_recipient_only_keeps_private_messages_private(db_session):
    """Test RecipientOnly delivers to the sender and the recipient only"""
    server, relay = make_relay(db_session, RecipientOnly())
    connect(server, relay, "sid-a", "alice@x.com")
    connect(server, relay, "sid-b", "bob@x.com")
    connect(server, relay, "sid-c", "carol@x.com")

    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    assert len(server.received["sid-a"]) == 1
    assert len(server.received["sid-b"]) == 1
    assert server.received["sid-c"] == []


def test_recipient_only_broadcasts_public_messages(db_session):
    """Test RecipientOnly still broadcasts non-private messages"""
    server, relay = make_relay(db_session, RecipientOnly())
    connect(server, relay, "sid-a", "alice@x.com")
    connect(server, relay, "sid-b")

    asyncio.run(relay.on_send_message("sid-a", {**PRIVATE_HI, "is_private": False}))

    assert len(server.received["sid-a"]) == 1
    assert len(server.received["sid-b"]) == 1


def test_failed_insert_is_not_broadcast(db_session):
    """Test a persistence failure drops the message silently"""
    @contextmanager
    def broken_session():
        raise OperationalError("INSERT INTO messages", {}, Exception("db down"))
        yield  # pragma: no cover

    server = FakeServer()
    relay = MessageRelay(server, broken_session, BroadcastAll())
    connect(server, relay, "sid-a")

    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    assert server.received["sid-a"] == []
    assert db_session.query(Message).count() == 0


def test_malformed_payload_is_dropped(db_session):
    """Test a payload without content is neither stored nor broadcast"""
    server, relay = make_relay(db_session)
    connect(server, relay, "sid-a")

    asyncio.run(relay.on_send_message("sid-a", {"username": "alice"}))
    asyncio.run(relay.on_send_message("sid-a", "not a dict"))

    assert server.received["sid-a"] == []
    assert db_session.query(Message).count() == 0


def test_connect_joins_email_room(db_session):
    """Test a client registering an email joins that email's room"""
    server, relay = make_relay(db_session)
    connect(server, relay, "sid-b", "Bob@X.com")
    assert room_for_email("bob@x.com") in server.rooms["sid-b"]


def test_disconnected_client_stops_receiving(db_session):
    """Test only currently connected clients get later broadcasts"""
    server, relay = make_relay(db_session)
    connect(server, relay, "sid-a")
    connect(server, relay, "sid-b")

    asyncio.run(relay.on_disconnect("sid-b"))
    del server.rooms["sid-b"]
    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    assert len(server.received["sid-a"]) == 1
    assert server.received["sid-b"] == []


def test_history_and_broadcast_share_timestamp_format(db_session):
    """Test /api/messages and receiveMessage serialise the same UTC timestamp"""
    fixed = datetime(2026, 3, 1, 12, 0, 30, 250000, tzinfo=timezone.utc)
    server = FakeServer()
    relay = MessageRelay(server, session_factory_for(db_session), BroadcastAll(), clock=lambda: fixed)
    connect(server, relay, "sid-a")

    asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    _, payload = server.received["sid-a"][0]
    client = TestClient(app)
    stored = client.get("/api/messages").json()[0]
    assert stored["timestamp"] == payload["timestamp"] == "2026-03-01T12:00:30.250000Z"


def test_null_private_flag_is_treated_as_public(db_session):
    """Test a client sending is_private: null still gets its message through"""
    server, relay = make_relay(db_session)
    connect(server, relay, "sid-a")
    connect(server, relay, "sid-b")

    asyncio.run(relay.on_send_message("sid-a", {**PRIVATE_HI, "recipient_email": None, "is_private": None}))

    assert db_session.query(Message).one().is_private is False
    _, payload = server.received["sid-b"][0]
    assert payload["is_private"] is False


def test_failed_insert_logs_traceback(db_session, caplog):
    """Test a persistence failure is logged with its traceback"""
    @contextmanager
    def broken_session():
        raise OperationalError("INSERT INTO messages", {}, Exception("db down"))
        yield  # pragma: no cover

    server = FakeServer()
    relay = MessageRelay(server, broken_session, BroadcastAll())
    connect(server, relay, "sid-a")

    with caplog.at_level(logging.ERROR, logger="app.realtime.relay"):
        asyncio.run(relay.on_send_message("sid-a", PRIVATE_HI))

    records = [r for r in caplog.records if r.name == "app.realtime.relay"]
    assert len(records) == 1
    assert records[0].exc_info is not None
    assert isinstance(records[0].exc_info[1], OperationalError)
