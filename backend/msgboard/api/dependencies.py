"""Service Dependencies — build services from the per-request DB session.

Invariants:
    - One repository + service instance per request, sharing the request's session

Design Decisions:
    - Dependency injection through FastAPI Depends: tests override get_db only
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from msgboard.infrastructure.database import get_db
from msgboard.infrastructure.repositories import (
    SqlMessageRepository, SqlUserRepository,
)
from msgboard.services.message_service import MessageService
from msgboard.services.user_service import UserService


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlUserRepository(db))


def get_message_service(db: AsyncSession = Depends(get_db)) -> MessageService:
    return MessageService(SqlMessageRepository(db))
