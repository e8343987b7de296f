"""Message Broadcaster — fire-and-forget fan-out and SSE stream framing."""

import asyncio
import json

from msgboard.api.routes.messaging import message_event_stream
from msgboard.infrastructure.notifier import MessageBroadcaster


async def test_publish_without_subscribers_is_noop():
    broadcaster = MessageBroadcaster()
    broadcaster.publish("messageUpdate", {"msg": {"msg": "Hello"}})
    assert broadcaster.subscriber_count == 0


async def test_every_subscriber_receives_event():
    broadcaster = MessageBroadcaster()
    async with broadcaster.subscribe() as first, broadcaster.subscribe() as second:
        broadcaster.publish("messageUpdate", {"msg": {"msg": "Hello"}})
        expected = {"type": "messageUpdate", "data": {"msg": {"msg": "Hello"}}}
        assert first.get_nowait() == expected
        assert second.get_nowait() == expected


async def test_subscriber_removed_on_exit():
    broadcaster = MessageBroadcaster()
    async with broadcaster.subscribe():
        assert broadcaster.subscriber_count == 1
    assert broadcaster.subscriber_count == 0


async def test_full_queue_drops_event_without_raising():
    broadcaster = MessageBroadcaster(queue_size=1)
    async with broadcaster.subscribe() as queue:
        broadcaster.publish("messageUpdate", {"n": 1})
        broadcaster.publish("messageUpdate", {"n": 2})
        assert queue.qsize() == 1
        assert queue.get_nowait()["data"] == {"n": 1}


async def test_event_stream_yields_sse_lines():
    broadcaster = MessageBroadcaster()
    stream = message_event_stream(broadcaster, keepalive_seconds=5)
    pending = asyncio.ensure_future(stream.__anext__())
    while broadcaster.subscriber_count == 0:
        await asyncio.sleep(0)

    broadcaster.publish("messageUpdate", {"msg": {"msg": "Hello"}})
    line = await asyncio.wait_for(pending, timeout=1)

    assert line.startswith("data: ") and line.endswith("\n\n")
    assert json.loads(line[len("data: "):]) == {
        "type": "messageUpdate", "data": {"msg": {"msg": "Hello"}},
    }
    await stream.aclose()
    assert broadcaster.subscriber_count == 0


async def test_event_stream_sends_keepalive_when_idle():
    broadcaster = MessageBroadcaster()
    stream = message_event_stream(broadcaster, keepalive_seconds=0.01)
    line = await asyncio.wait_for(stream.__anext__(), timeout=1)
    assert line == ": keepalive\n\n"
    await stream.aclose()
