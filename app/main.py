from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.assigned_tasks import router as assigned_tasks_router
from app.api.auth import router as auth_router
from app.api.employees import router as employees_router
from app.api.health import router as health_router
from app.api.me import router as me_router
from app.api.messages import router as messages_router
from app.api.root import router as root_router
from app.api.todos import router as todos_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging
from app.db.session import Database
from app.realtime import MessageRelay, build_policy, create_socket_server

configure_logging(settings.LOG_LEVEL)

sio = create_socket_server(settings.cors_origins_list)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.DATABASE_URL)
    app.state.database = database

    relay = MessageRelay(sio, database.session, build_policy(settings.CHAT_DELIVERY_POLICY))
    relay.register(sio)
    app.state.relay = relay
    try:
        yield
    finally:
        database.dispose()


app = FastAPI(title="Workplace Hub", lifespan=lifespan)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(me_router)
app.include_router(employees_router)
app.include_router(assigned_tasks_router)
app.include_router(messages_router)
app.include_router(todos_router)

# Entry point for uvicorn: Socket.IO on /socket.io, everything else to FastAPI
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)
