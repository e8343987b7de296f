"""Boundary Protocols — contracts between core/services and the shell.

Invariants:
    - Services depend on these Protocols only, never on SQLAlchemy
    - find_and_update / find_and_delete are atomic per record (single statement)
    - Repositories raise DatabaseError / ConflictError (core/errors.py), never
      raw driver exceptions
    - MessageNotifier.publish never blocks and never raises to the caller

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure helpers they feed are sync
"""

from datetime import datetime
from typing import Any, Protocol

from msgboard.core.domain_types import MessageRecord, UserPatch, UserRecord


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_by_username(self, username: str | None) -> UserRecord | None: ...
    async def create(
        self, username: str, password: str, date_joined: datetime,
    ) -> UserRecord: ...
    async def find_and_update(
        self, username: str, patch: UserPatch,
    ) -> UserRecord | None: ...
    async def find_and_delete(self, username: str) -> UserRecord | None: ...


class MessageRepository(Protocol):
    """Contract for message persistence — implemented by shell."""
    async def create(
        self, msg: str, msg_from: str, msg_date_time: datetime | None,
    ) -> MessageRecord: ...
    async def list_by_date(self) -> list[MessageRecord]: ...


class MessageNotifier(Protocol):
    """Side channel for real-time subscribers. Fire-and-forget."""
    def publish(self, event: str, payload: dict[str, Any]) -> None: ...
