"""Message Service — post and list board messages.

Invariants:
    - save_message trims msg/msg_from and resolves the timestamp BEFORE validating
    - A blank msg or msg_from after trimming creates no record
    - get_messages is ascending by msg_date_time, equal timestamps in insertion order
    - get_messages never fails: any error yields []

Design Decisions:
    - Messages have no safe projection: the created record is returned as-is
    - Empty-on-error for listing keeps the board readable during store hiccups;
      callers cannot tell "no messages" from "fetch failed" (logged at ERROR)
    - Stable re-sort after the ordered query: ordering holds even if a store
      returns rows out of order
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from msgboard.core.domain_types import MessageRecord
from msgboard.core.normalization import normalize_message, utc_now
from msgboard.core.repository_protocols import MessageRepository
from msgboard.core.result import Err, Ok, Result
from msgboard.core.validation import is_message_draft_valid

logger = logging.getLogger(__name__)

INVALID_MESSAGE_BODY = "Invalid message body"
SAVE_FAILED = "Failed to save message"


class MessageService:
    """Board operations over an injected MessageRepository."""

    def __init__(
        self, messages: MessageRepository, clock: Callable[[], datetime] = utc_now,
    ):
        self._messages = messages
        self._clock = clock

    async def save_message(self, candidate: Mapping[str, Any]) -> Result[MessageRecord]:
        try:
            draft = normalize_message(candidate, self._clock())
            if not is_message_draft_valid(draft):
                return Err(INVALID_MESSAGE_BODY)

            record = await self._messages.create(
                msg=draft["msg"],
                msg_from=draft["msg_from"],
                msg_date_time=draft["msg_date_time"],
            )
            return Ok(record)
        except Exception as e:
            logger.error(f"{SAVE_FAILED}: {e}", exc_info=True)
            return Err(SAVE_FAILED)

    async def get_messages(self) -> list[MessageRecord]:
        try:
            messages = await self._messages.list_by_date()
            return sorted(messages, key=lambda m: m["msg_date_time"])
        except Exception as e:
            logger.error(f"Failed to fetch messages: {e}", exc_info=True)
            return []
