"""
Realtime chat over Socket.IO.
"""
from app.realtime.delivery import BroadcastAll, DeliveryPolicy, RecipientOnly, build_policy
from app.realtime.relay import MessageRelay
from app.realtime.server import create_socket_server

__all__ = [
    "BroadcastAll",
    "DeliveryPolicy",
    "MessageRelay",
    "RecipientOnly",
    "build_policy",
    "create_socket_server",
]
