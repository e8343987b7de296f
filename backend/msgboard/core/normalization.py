"""Normalization — trims inbound strings, fills timestamps, strips server-only fields.

Invariants:
    - to_safe_user NEVER emits a password key, even for partial records
    - parse_timestamp returns `now` only when the value is absent (falsy)
    - Supplied timestamps are parsed, not validated: unparseable input -> None
    - Every datetime leaving this module is timezone-aware UTC
    - build_user_patch never carries a blank username or password

Design Decisions:
    - Invalid timestamps are passed through as None rather than rejected here;
      the store's NOT NULL constraint rejects them later and the service maps
      that to its fixed failure message
    - Epoch numbers are milliseconds (browser Date.now() convention)
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from msgboard.core.domain_types import MessageDraft, SafeUser, UserPatch

_PATCHABLE_USER_FIELDS = ("username", "password")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def trim_or_none(value: Any) -> str | None:
    """Stringify and strip; None stays None."""
    if value is None:
        return None
    return str(value).strip()


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any, now: datetime) -> datetime | None:
    """Resolve a caller-supplied timestamp.

    Falsy values mean "not supplied" and yield `now`. Strings are read as
    ISO-8601, numbers as epoch milliseconds. Anything unreadable yields None.
    """
    if not value:
        return now
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return to_utc(datetime.fromisoformat(value.strip()))
        except ValueError:
            return None
    return None


def to_safe_user(record: Mapping[str, Any]) -> SafeUser:
    """Project a stored user onto its public shape."""
    return SafeUser(
        id=record.get("id"),
        username=record.get("username"),
        date_joined=record.get("date_joined"),
    )


def normalize_message(candidate: Mapping[str, Any], now: datetime) -> MessageDraft:
    """Trim text fields and resolve the timestamp of a message candidate."""
    return MessageDraft(
        msg=trim_or_none(candidate.get("msg")),
        msg_from=trim_or_none(candidate.get("msg_from")),
        msg_date_time=parse_timestamp(candidate.get("msg_date_time"), now),
    )


def build_user_patch(updates: Mapping[str, Any]) -> UserPatch:
    """Keep only recognized fields that are non-blank after trimming."""
    patch = UserPatch()
    for field in _PATCHABLE_USER_FIELDS:
        value = trim_or_none(updates.get(field))
        if value:
            patch[field] = value
    return patch
