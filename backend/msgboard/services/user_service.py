"""User Service — signup, lookup, login, deletion and update of accounts.

Invariants:
    - Every operation returns Result[SafeUser]; the password never leaves
    - Inputs are trimmed before any lookup or write
    - Unexpected failures map to ONE fixed message per operation; the
      underlying exception text is logged, never returned
    - Blank credentials after trimming fail login without touching the store

Design Decisions:
    - Duplicate check before insert AND ConflictError on insert: the unique
      index closes the race between two concurrent signups for one username
    - Password comparison is exact string equality on plain text (known defect,
      kept so the login contract stays byte-for-byte)
    - Blank username/password on signup fail like any rejected write
      ("Failed to create user"), the same outcome a required-field check gives
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from msgboard.core.domain_types import SafeUser
from msgboard.core.errors import ConflictError
from msgboard.core.normalization import (
    build_user_patch, to_safe_user, trim_or_none, utc_now,
)
from msgboard.core.repository_protocols import UserRepository
from msgboard.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists"
USER_NOT_FOUND = "User not found"
INVALID_CREDENTIALS = "Invalid credentials"

CREATE_FAILED = "Failed to create user"
GET_FAILED = "Failed to get user"
LOGIN_FAILED = "Failed to login"
DELETE_FAILED = "Failed to delete user"
UPDATE_FAILED = "Failed to update user"


class UserService:
    """Account operations over an injected UserRepository."""

    def __init__(
        self, users: UserRepository, clock: Callable[[], datetime] = utc_now,
    ):
        self._users = users
        self._clock = clock

    async def save_user(self, candidate: Mapping[str, Any]) -> Result[SafeUser]:
        """Create an account stamped with the current time."""
        try:
            username = trim_or_none(candidate.get("username"))
            password = trim_or_none(candidate.get("password"))

            if await self._users.find_by_username(username) is not None:
                return Err(USERNAME_TAKEN)
            if not username or not password:
                logger.warning("Rejected signup with blank username or password")
                return Err(CREATE_FAILED)

            record = await self._users.create(
                username=username, password=password, date_joined=self._clock(),
            )
            return Ok(to_safe_user(record))
        except ConflictError:
            return Err(USERNAME_TAKEN)
        except Exception as e:
            logger.error(f"{CREATE_FAILED}: {e}", exc_info=True)
            return Err(CREATE_FAILED)

    async def get_user_by_username(self, username: str) -> Result[SafeUser]:
        try:
            record = await self._users.find_by_username(trim_or_none(username))
            if record is None:
                return Err(USER_NOT_FOUND)
            return Ok(to_safe_user(record))
        except Exception as e:
            logger.error(f"{GET_FAILED}: {e}", exc_info=True)
            return Err(GET_FAILED)

    async def login_user(self, credentials: Mapping[str, Any]) -> Result[SafeUser]:
        """Exact match on trimmed username and password."""
        try:
            username = trim_or_none(credentials.get("username"))
            password = trim_or_none(credentials.get("password"))
            if not username or not password:
                return Err(INVALID_CREDENTIALS)

            record = await self._users.find_by_username(username)
            if record is None or record["password"] != password:
                return Err(INVALID_CREDENTIALS)
            return Ok(to_safe_user(record))
        except Exception as e:
            logger.error(f"{LOGIN_FAILED}: {e}", exc_info=True)
            return Err(LOGIN_FAILED)

    async def delete_user_by_username(self, username: str) -> Result[SafeUser]:
        """Atomically remove an account and return what was removed."""
        try:
            record = await self._users.find_and_delete(trim_or_none(username) or "")
            if record is None:
                return Err(USER_NOT_FOUND)
            return Ok(to_safe_user(record))
        except Exception as e:
            logger.error(f"{DELETE_FAILED}: {e}", exc_info=True)
            return Err(DELETE_FAILED)

    async def update_user(
        self, username: str, updates: Mapping[str, Any],
    ) -> Result[SafeUser]:
        """Apply recognized fields atomically; returns the post-update projection."""
        try:
            patch = build_user_patch(updates)
            record = await self._users.find_and_update(
                trim_or_none(username) or "", patch,
            )
            if record is None:
                return Err(USER_NOT_FOUND)
            return Ok(to_safe_user(record))
        except Exception as e:
            logger.error(f"{UPDATE_FAILED}: {e}", exc_info=True)
            return Err(UPDATE_FAILED)
