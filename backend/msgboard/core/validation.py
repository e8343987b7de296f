"""Request Validation — presence/shape checks for inbound payloads.

Invariants:
    - A field is present iff it is a str whose stripped form is non-empty
    - Validators never raise and never mutate the payload
    - Failure is a bool; the handler picks the HTTP message

Design Decisions:
    - Explicit str check (not truthiness): {"username": 123} is invalid even
      though str(123) would be non-empty
    - Message validation ignores msgDateTime entirely; timestamp handling is a
      normalization concern (core/normalization.py)
"""

from collections.abc import Mapping
from typing import Any


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _has_fields(payload: Any, *fields: str) -> bool:
    if not isinstance(payload, Mapping):
        return False
    return all(is_non_empty_string(payload.get(f)) for f in fields)


def is_user_body_valid(payload: Any) -> bool:
    """True iff payload carries non-blank string username and password."""
    return _has_fields(payload, "username", "password")


def is_message_body_valid(payload: Any) -> bool:
    """True iff payload carries non-blank string msg and msgFrom."""
    return _has_fields(payload, "msg", "msgFrom")


def is_message_draft_valid(draft: Mapping[str, Any]) -> bool:
    """Same rule as is_message_body_valid, over a normalized (snake_case) draft."""
    return _has_fields(draft, "msg", "msg_from")
