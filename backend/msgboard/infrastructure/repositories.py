"""SQL Repositories — SQLAlchemy implementations of the persistence Protocols.

Invariants:
    - Each write commits its own unit of work; failures roll back before raising
    - find_and_update / find_and_delete are single UPDATE/DELETE ... RETURNING
      statements: no read-modify-write window between concurrent requests
    - Unique-index violations -> ConflictError; every other SQLAlchemy error ->
      DatabaseError. Raw driver exceptions never leave this module
    - Returned records carry timezone-aware UTC datetimes (SQLite drops tzinfo)

Design Decisions:
    - Records are plain dicts (core/domain_types.py), not ORM objects: callers
      cannot lazy-load or mutate tracked state after the session closes
    - Built per request from the get_db session (api/dependencies.py)
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from msgboard.core.domain_types import MessageRecord, UserPatch, UserRecord
from msgboard.core.errors import ConflictError, DatabaseError
from msgboard.core.normalization import to_utc
from msgboard.models.message import Message
from msgboard.models.user import User

logger = logging.getLogger(__name__)

_USER_COLUMNS = (User.id, User.username, User.password, User.date_joined)


@asynccontextmanager
async def _translate_errors(
    db: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Roll back and re-raise SQLAlchemy failures as core errors."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        if "unique" in str(e.orig).lower():
            logger.warning(
                f"Unique constraint rejected {operation}",
                extra={"operation": operation},
            )
            raise ConflictError(f"{operation}: duplicate key")
        logger.error(f"DB integrity error during {operation}: {e}")
        raise DatabaseError("Integrity constraint violated", operation)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"DB error during {operation}: {e}")
        raise DatabaseError("Database operation failed", operation)


def _user_record(row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        date_joined=to_utc(row["date_joined"]),
    )


def _user_row(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "password": user.password,
        "date_joined": user.date_joined,
    }


def _message_record(message: Message) -> MessageRecord:
    return MessageRecord(
        id=message.id,
        msg=message.msg,
        msg_from=message.msg_from,
        msg_date_time=to_utc(message.msg_date_time),
    )


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_username(self, username: str | None) -> UserRecord | None:
        async with _translate_errors(self.db, "find user"):
            result = await self.db.execute(
                select(User).where(User.username == username),
            )
            user = result.scalar_one_or_none()
        return _user_record(_user_row(user)) if user else None

    async def create(
        self, username: str, password: str, date_joined: datetime,
    ) -> UserRecord:
        user = User(username=username, password=password, date_joined=date_joined)
        async with _translate_errors(self.db, "create user"):
            self.db.add(user)
            await self.db.commit()
        return _user_record(_user_row(user))

    async def find_and_update(
        self, username: str, patch: UserPatch,
    ) -> UserRecord | None:
        if not patch:
            return await self.find_by_username(username)
        async with _translate_errors(self.db, "update user"):
            result = await self.db.execute(
                update(User)
                .where(User.username == username)
                .values(**patch)
                .returning(*_USER_COLUMNS),
            )
            row = result.mappings().one_or_none()
            await self.db.commit()
        return _user_record(row) if row else None

    async def find_and_delete(self, username: str) -> UserRecord | None:
        async with _translate_errors(self.db, "delete user"):
            result = await self.db.execute(
                delete(User)
                .where(User.username == username)
                .returning(*_USER_COLUMNS),
            )
            row = result.mappings().one_or_none()
            await self.db.commit()
        return _user_record(row) if row else None


class SqlMessageRepository:
    """Message persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, msg: str, msg_from: str, msg_date_time: datetime | None,
    ) -> MessageRecord:
        message = Message(msg=msg, msg_from=msg_from, msg_date_time=msg_date_time)
        async with _translate_errors(self.db, "create message"):
            self.db.add(message)
            await self.db.commit()
        return _message_record(message)

    async def list_by_date(self) -> list[MessageRecord]:
        async with _translate_errors(self.db, "list messages"):
            result = await self.db.execute(
                select(Message).order_by(
                    Message.msg_date_time.asc(), Message.created_at.asc(),
                ),
            )
            messages = result.scalars().all()
        return [_message_record(m) for m in messages]
