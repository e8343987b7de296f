"""Message Board API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MsgBoardError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database engine and broadcaster created on startup, engine disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from msgboard.api.error_handlers import register_error_handlers
from msgboard.api.routes import health, messaging, users
from msgboard.config import get_settings
from msgboard.infrastructure.database import close_db, init_db
from msgboard.infrastructure.notifier import init_broadcaster
from msgboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_tables()
    init_broadcaster(settings.notifier_queue_size)
    logger.info("Message board API started")
    yield
    await close_db()
    logger.info("Message board API shutting down")


app = FastAPI(
    title="Message Board API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(messaging.router)

register_error_handlers(app)
