"""Domain Types — record shapes exchanged between core, services and repositories.

Invariants:
    - UserRecord is the only shape that carries a password
    - SafeUser is a projection computed on every response, never persisted
    - Records use snake_case keys; camelCase/_id aliases live in schemas/ only

Design Decisions:
    - TypedDict over ORM objects: repositories hand plain dicts across the
      boundary so core never touches a SQLAlchemy session
    - NewType for identifiers: zero runtime cost, full type-checker support
"""

from datetime import datetime
from typing import NewType, TypedDict
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
MessageId = NewType("MessageId", UUID)


# ─── Records ─────────────────────────────────────────────────────

class UserRecord(TypedDict):
    """Stored user, password included."""
    id: UserId
    username: str
    password: str
    date_joined: datetime


class SafeUser(TypedDict):
    """Public user projection — no password."""
    id: UserId | None
    username: str | None
    date_joined: datetime | None


class UserPatch(TypedDict, total=False):
    """Recognized, already-trimmed fields of a user update."""
    username: str
    password: str


class MessageRecord(TypedDict):
    """Stored message. Returned to callers as-is."""
    id: MessageId
    msg: str
    msg_from: str
    msg_date_time: datetime


class MessageDraft(TypedDict):
    """Normalized message candidate, not yet persisted.

    msg_date_time is None when the caller supplied an unparseable value.
    """
    msg: str | None
    msg_from: str | None
    msg_date_time: datetime | None


# ─── Event names ─────────────────────────────────────────────────

MESSAGE_UPDATE_EVENT = "messageUpdate"
