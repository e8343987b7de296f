"""Tests for request validation — pure predicates, no IO."""

import pytest

from msgboard.core.validation import (
    is_message_body_valid,
    is_message_draft_valid,
    is_non_empty_string,
    is_user_body_valid,
)


def test_user_body_with_both_fields_is_valid():
    assert is_user_body_valid({"username": "alice", "password": "secret"})


def test_user_body_with_padded_fields_is_valid():
    assert is_user_body_valid({"username": "  alice ", "password": " secret "})


@pytest.mark.parametrize("payload", [
    {"username": "", "password": "secret"},
    {"username": "   ", "password": "secret"},
    {"username": "alice", "password": ""},
    {"username": "alice", "password": "\t\n"},
    {"username": "alice"},
    {"password": "secret"},
    {},
])
def test_user_body_missing_or_blank_field_is_invalid(payload):
    assert not is_user_body_valid(payload)


def test_user_body_requires_strings():
    assert not is_user_body_valid({"username": 123, "password": "secret"})
    assert not is_user_body_valid({"username": "alice", "password": ["x"]})


@pytest.mark.parametrize("payload", [None, "alice", ["alice", "secret"], 42])
def test_non_mapping_user_body_is_invalid(payload):
    assert not is_user_body_valid(payload)


def test_message_body_ignores_timestamp():
    assert is_message_body_valid({"msg": "Hello", "msgFrom": "User1"})
    assert is_message_body_valid(
        {"msg": "Hello", "msgFrom": "User1", "msgDateTime": "not a date"},
    )


def test_message_body_blank_msg_is_invalid():
    assert not is_message_body_valid({"msg": "   ", "msgFrom": "User1"})


def test_message_body_missing_msg_from_is_invalid():
    assert not is_message_body_valid({"msg": "Hello"})


def test_message_body_uses_wire_key_not_snake_case():
    assert not is_message_body_valid({"msg": "Hello", "msg_from": "User1"})


def test_message_draft_uses_snake_case_key():
    assert is_message_draft_valid({"msg": "Hello", "msg_from": "User1"})
    assert not is_message_draft_valid({"msg": "Hello", "msg_from": ""})
    assert not is_message_draft_valid({"msg": None, "msg_from": "User1"})


def test_non_empty_string():
    assert is_non_empty_string("x")
    assert not is_non_empty_string(" ")
    assert not is_non_empty_string(None)
    assert not is_non_empty_string(0)
