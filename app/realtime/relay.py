"""Chat relay: persist each `sendMessage` event, then fan it out.

Ordering per event is insert first, deliver second. A failed insert is logged
and the message is dropped without telling the sender.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any

import socketio
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.models.message import Message
from app.realtime.delivery import DeliveryPolicy, Emitter
from app.realtime.server import room_for_email
from app.schemas.message import MessageBroadcast, MessageIn

logger = logging.getLogger(__name__)

SEND_EVENT = "sendMessage"

SessionFactory = Callable[[], AbstractContextManager[Session]]


class MessageRelay:
    def __init__(
        self,
        emitter: Emitter,
        session_factory: SessionFactory,
        policy: DeliveryPolicy,
        clock: Callable[[], datetime] | None = None,
    ):
        self.emitter = emitter
        self.session_factory = session_factory
        self.policy = policy
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def register(self, server: socketio.AsyncServer) -> None:
        server.on("connect", self.on_connect)
        server.on("disconnect", self.on_disconnect)
        server.on(SEND_EVENT, self.on_send_message)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        # Optional and unverified: only used to route private messages
        email = auth.get("email") if isinstance(auth, dict) else None
        if email:
            await self.emitter.enter_room(sid, room_for_email(email))
        logger.info("Chat client connected sid=%s email=%s", sid, email)

    async def on_disconnect(self, sid: str, *args: Any) -> None:
        logger.info("Chat client disconnected sid=%s", sid)

    async def on_send_message(self, sid: str, data: Any) -> None:
        received_at = self.clock()
        logger.debug("Incoming message from sid=%s: %r", sid, data)

        try:
            incoming = MessageIn.model_validate(data)
        except ValidationError as exc:
            logger.warning("Dropping malformed message from sid=%s: %s", sid, exc)
            return

        try:
            await run_in_threadpool(self.persist, incoming, received_at)
        except SQLAlchemyError:
            logger.exception("Could not store message from sid=%s", sid)
            return

        broadcast = MessageBroadcast(timestamp=received_at, **incoming.model_dump())
        await self.policy.deliver(self.emitter, sid, broadcast.model_dump(mode="json"))

    def persist(self, incoming: MessageIn, received_at: datetime) -> None:
        with self.session_factory() as db:
            db.add(
                Message(
                    username=incoming.username,
                    content=incoming.content,
                    timestamp=received_at,
                    department=incoming.department,
                    recipient_email=incoming.recipient_email,
                    is_private=incoming.is_private,
                )
            )
