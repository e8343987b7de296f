"""Message Service — save_message Result contract and get_messages ordering."""

from datetime import datetime, timezone

import pytest

from msgboard.core.result import Err
from msgboard.services.message_service import MessageService


@pytest.fixture
def service(message_repo, clock):
    return MessageService(message_repo, clock=clock)


async def test_save_message_returns_full_record(service):
    result = await service.save_message({
        "msg": "Hello", "msg_from": "User1", "msg_date_time": "2024-06-04",
    })
    assert result.is_ok
    assert result.value["msg"] == "Hello"
    assert result.value["msg_from"] == "User1"
    assert result.value["msg_date_time"] == datetime(2024, 6, 4, tzinfo=timezone.utc)
    assert result.value["id"] is not None


async def test_save_message_trims_text(service, message_repo):
    await service.save_message({"msg": "  Hello  ", "msg_from": " User1 "})
    assert message_repo.records[0]["msg"] == "Hello"
    assert message_repo.records[0]["msg_from"] == "User1"


async def test_save_message_defaults_timestamp_to_now(service, fixed_now):
    result = await service.save_message({"msg": "Hello", "msg_from": "User1"})
    assert result.value["msg_date_time"] == fixed_now


async def test_save_message_blank_msg_creates_nothing(service, message_repo):
    result = await service.save_message({"msg": "", "msg_from": "User1"})
    assert result == Err("Invalid message body")
    assert message_repo.records == []


async def test_save_message_whitespace_sender_is_invalid(service, message_repo):
    result = await service.save_message({"msg": "Hello", "msg_from": "   "})
    assert result == Err("Invalid message body")
    assert message_repo.records == []


async def test_save_message_invalid_timestamp_fails_at_store(service, message_repo):
    """Unparseable dates are not rejected up front; the store refuses them."""
    result = await service.save_message({
        "msg": "Hello", "msg_from": "User1", "msg_date_time": "not a date",
    })
    assert result == Err("Failed to save message")
    assert message_repo.records == []


async def test_save_message_persistence_failure(failing_message_repo, clock, driver_text):
    service = MessageService(failing_message_repo, clock=clock)
    result = await service.save_message({"msg": "Hello", "msg_from": "User1"})
    assert result == Err("Failed to save message")
    assert driver_text not in result.error


async def test_get_messages_sorted_ascending(service):
    await service.save_message({"msg": "Hi", "msg_from": "User2", "msg_date_time": "2024-06-05"})
    await service.save_message({"msg": "Hello", "msg_from": "User1", "msg_date_time": "2024-06-04"})

    messages = await service.get_messages()

    assert [m["msg_date_time"].date().isoformat() for m in messages] == [
        "2024-06-04", "2024-06-05",
    ]
    assert [m["msg"] for m in messages] == ["Hello", "Hi"]


async def test_get_messages_equal_timestamps_keep_insertion_order(service):
    for text in ("first", "second", "third"):
        await service.save_message({
            "msg": text, "msg_from": "User1", "msg_date_time": "2024-06-04T09:00:00Z",
        })
    messages = await service.get_messages()
    assert [m["msg"] for m in messages] == ["first", "second", "third"]


async def test_get_messages_empty_store(service):
    assert await service.get_messages() == []


async def test_get_messages_error_is_empty_list(failing_message_repo, clock):
    service = MessageService(failing_message_repo, clock=clock)
    assert await service.get_messages() == []
