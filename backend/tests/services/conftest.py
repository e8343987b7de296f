"""Service test fixtures — in-memory fake repositories and a fixed clock.

Invariants:
    - Fakes honour the repository Protocols (same signatures, same error types)
    - Failing fakes raise DatabaseError carrying driver-like text, so tests can
      prove that text never reaches a Result
    - Every fake logs its calls, so tests can assert "no lookup happened"
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from msgboard.core.errors import ConflictError, DatabaseError

FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
DRIVER_TEXT = "connection reset by peer (pid 4242)"


class FakeUserRepository:
    def __init__(self):
        self.records: dict[str, dict] = {}
        self.calls: list[str] = []

    def seed(self, username: str, password: str, date_joined: datetime) -> dict:
        record = {
            "id": uuid4(), "username": username,
            "password": password, "date_joined": date_joined,
        }
        self.records[username] = record
        return record

    async def find_by_username(self, username):
        self.calls.append("find_by_username")
        record = self.records.get(username)
        return dict(record) if record else None

    async def create(self, username, password, date_joined):
        self.calls.append("create")
        if username in self.records:
            raise ConflictError("create user: duplicate key")
        return dict(self.seed(username, password, date_joined))

    async def find_and_update(self, username, patch):
        self.calls.append("find_and_update")
        record = self.records.pop(username, None)
        if record is None:
            return None
        record.update(patch)
        self.records[record["username"]] = record
        return dict(record)

    async def find_and_delete(self, username):
        self.calls.append("find_and_delete")
        record = self.records.pop(username, None)
        return dict(record) if record else None


class FailingUserRepository:
    async def find_by_username(self, username):
        raise DatabaseError(DRIVER_TEXT, "find user")

    async def create(self, username, password, date_joined):
        raise DatabaseError(DRIVER_TEXT, "create user")

    async def find_and_update(self, username, patch):
        raise DatabaseError(DRIVER_TEXT, "update user")

    async def find_and_delete(self, username):
        raise DatabaseError(DRIVER_TEXT, "delete user")


class FakeMessageRepository:
    """Returns messages in insertion order; sorting is the service's job."""

    def __init__(self):
        self.records: list[dict] = []

    async def create(self, msg, msg_from, msg_date_time):
        if msg_date_time is None:
            raise DatabaseError("NOT NULL constraint failed", "create message")
        record = {
            "id": uuid4(), "msg": msg, "msg_from": msg_from,
            "msg_date_time": msg_date_time,
        }
        self.records.append(record)
        return dict(record)

    async def list_by_date(self):
        return [dict(r) for r in self.records]


class FailingMessageRepository:
    async def create(self, msg, msg_from, msg_date_time):
        raise DatabaseError(DRIVER_TEXT, "create message")

    async def list_by_date(self):
        raise DatabaseError(DRIVER_TEXT, "list messages")


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def user_repo():
    return FakeUserRepository()


@pytest.fixture
def failing_user_repo():
    return FailingUserRepository()


@pytest.fixture
def message_repo():
    return FakeMessageRepository()


@pytest.fixture
def failing_message_repo():
    return FailingMessageRepository()


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def driver_text():
    return DRIVER_TEXT
