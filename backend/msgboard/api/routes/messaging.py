"""Messaging Routes — post a message, list messages, subscribe to updates.

Invariants:
    - addMessage: absent or falsy-scalar messageToAdd -> 400 "Invalid request";
      empty object or array, blank msg or msgFrom -> 400 "Invalid message body"
      (plaintext, before the service)
    - A created message is published as "messageUpdate" AFTER the save succeeds;
      publish failures are logged and never change the HTTP response
    - getMessages always answers 200 with a list unless the route itself breaks

Design Decisions:
    - SSE over StreamingResponse for subscribers: one-way push is all the
      board needs, and it rides plain HTTP
    - Keepalive comments every 15s keep idle proxies from closing the stream
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, AsyncGenerator

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from msgboard.api.dependencies import get_message_service
from msgboard.core.domain_types import MESSAGE_UPDATE_EVENT
from msgboard.core.repository_protocols import MessageNotifier
from msgboard.core.validation import is_message_body_valid
from msgboard.infrastructure.notifier import MessageBroadcaster, get_broadcaster
from msgboard.schemas.message import MessageResponse
from msgboard.services.message_service import MessageService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/messaging", tags=["messaging"])

_KEEPALIVE_SECONDS = 15.0

# SSE headers prevent proxy/browser buffering of streamed events.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def _sse_line(event: dict) -> str:
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


def _wrapper_missing(value: Any) -> bool:
    # Empty objects and arrays count as present and fail the field check
    return not value and not isinstance(value, (Mapping, list))


def _publish_quietly(notifier: MessageNotifier, message: MessageResponse) -> None:
    try:
        notifier.publish(MESSAGE_UPDATE_EVENT, {"msg": message.to_wire()})
    except Exception:
        logger.error(
            "Failed to publish message update",
            extra={"event": MESSAGE_UPDATE_EVENT}, exc_info=True,
        )


@router.post("/addMessage", response_model=MessageResponse)
async def add_message(
    payload: Any = Body(None),
    messages: MessageService = Depends(get_message_service),
    notifier: MessageNotifier = Depends(get_broadcaster),
):
    """Validate, save and broadcast a message."""
    incoming = payload.get("messageToAdd") if isinstance(payload, Mapping) else None
    if _wrapper_missing(incoming):
        return PlainTextResponse(
            "Invalid request", status_code=status.HTTP_400_BAD_REQUEST,
        )
    if not is_message_body_valid(incoming):
        return PlainTextResponse(
            "Invalid message body", status_code=status.HTTP_400_BAD_REQUEST,
        )

    result = await messages.save_message({
        "msg": incoming.get("msg"),
        "msg_from": incoming.get("msgFrom"),
        "msg_date_time": incoming.get("msgDateTime"),
    })
    if not result.is_ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.to_response(),
        )

    created = MessageResponse.from_record(result.value)
    _publish_quietly(notifier, created)
    return created


@router.get("/getMessages", response_model=list[MessageResponse])
async def get_messages(
    messages: MessageService = Depends(get_message_service),
):
    """All messages, oldest first."""
    try:
        records = await messages.get_messages()
        return [MessageResponse.from_record(r) for r in records]
    except Exception as e:
        logger.error(f"Error when fetching messages: {e}", exc_info=True)
        return PlainTextResponse(
            "Error when fetching messages",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


async def message_event_stream(
    broadcaster: MessageBroadcaster,
    keepalive_seconds: float = _KEEPALIVE_SECONDS,
) -> AsyncGenerator[str, None]:
    """Yield SSE lines for every published event until the client leaves."""
    async with broadcaster.subscribe() as queue:
        try:
            while True:
                try:
                    event = await asyncio.wait_for(
                        queue.get(), timeout=keepalive_seconds,
                    )
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield _sse_line(event)
        except asyncio.CancelledError:
            logger.info("Client disconnected from message stream")
            return


@router.get("/stream")
async def stream_messages(
    broadcaster: MessageBroadcaster = Depends(get_broadcaster),
):
    """SSE stream of messageUpdate events."""
    return StreamingResponse(
        message_event_stream(broadcaster),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )
