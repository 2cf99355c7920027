"""Who receives a relayed chat message.

The relay always persists first and then asks a DeliveryPolicy to emit the
`receiveMessage` event. `BroadcastAll` ignores `is_private`, which is how the
chat has always behaved. `RecipientOnly` keeps private messages between the
sender's connection and connections registered for `recipient_email`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from app.realtime.server import room_for_email

logger = logging.getLogger(__name__)

RECEIVE_EVENT = "receiveMessage"


class Emitter(Protocol):
    async def emit(self, event: str, data: Any = None, to: str | list[str] | None = None, **kwargs: Any) -> None: ...

    async def enter_room(self, sid: str, room: str, namespace: str | None = None) -> None: ...


class DeliveryPolicy(Protocol):
    name: str

    async def deliver(self, emitter: Emitter, sender_sid: str, payload: dict[str, Any]) -> None: ...


class BroadcastAll:
    name = "broadcast_all"

    async def deliver(self, emitter: Emitter, sender_sid: str, payload: dict[str, Any]) -> None:
        await emitter.emit(RECEIVE_EVENT, payload)


class RecipientOnly:
    name = "recipient_only"

    async def deliver(self, emitter: Emitter, sender_sid: str, payload: dict[str, Any]) -> None:
        recipient = payload.get("recipient_email")
        if not payload.get("is_private") or not recipient:
            await emitter.emit(RECEIVE_EVENT, payload)
            return

        # A sid is its own room; socketio dedupes a sid that sits in both
        await emitter.emit(RECEIVE_EVENT, payload, to=[room_for_email(recipient), sender_sid])


POLICIES: dict[str, type] = {
    BroadcastAll.name: BroadcastAll,
    RecipientOnly.name: RecipientOnly,
}


def build_policy(name: str) -> DeliveryPolicy:
    try:
        policy_cls = POLICIES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown CHAT_DELIVERY_POLICY {name!r}; expected one of {sorted(POLICIES)}"
        )
    logger.info("Chat delivery policy: %s", policy_cls.name)
    return policy_cls()
