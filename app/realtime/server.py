import socketio


def create_socket_server(cors_origins: list[str]) -> socketio.AsyncServer:
    """Socket.IO server shared by every realtime feature (chat today)."""
    allowed = "*" if cors_origins == ["*"] else cors_origins
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=allowed,
        logger=False,
        engineio_logger=False,
    )


def room_for_email(email: str) -> str:
    return f"email_{email.strip().lower()}"
