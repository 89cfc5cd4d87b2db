"""Validation of inbound bridge request lines."""

from __future__ import annotations

import pytest

from lmi_providers.base.dto import (
    ChatCompletionRequest,
    ListModelsRequest,
    ListProvidersRequest,
    RequestParseError,
    parse_request,
)


def test_parse_each_request_type():
    assert isinstance(parse_request('{"type":"list_providers"}'), ListProvidersRequest)  # nosec B101
    req = parse_request('{"type":"list_models","provider":"lmi_openai"}')
    assert isinstance(req, ListModelsRequest) and req.provider == "lmi_openai"  # nosec B101
    chat = parse_request(
        '{"type":"chat_completion","provider":"openai","model":"gpt-4o","messages":[{"role":"user","content":"hi"}]}'
    )
    assert isinstance(chat, ChatCompletionRequest)  # nosec B101
    assert chat.options == {} and chat.messages[0]["content"] == "hi"  # nosec B101


def test_null_options_and_messages_become_empty():
    chat = parse_request('{"type":"chat_completion","provider":"openai","options":null,"messages":null}')
    assert chat.options == {} and chat.messages == []  # nosec B101
    assert chat.model is None  # nosec B101


def test_tools_fold_into_invocation_options():
    chat = parse_request(
        '{"type":"chat_completion","provider":"openai","options":{"temperature":0.2},"tools":[{"type":"function"}]}'
    )
    assert chat.invocation_options() == {"temperature": 0.2, "tools": [{"type": "function"}]}  # nosec B101


def test_extra_fields_are_ignored():
    req = parse_request('{"type":"list_providers","id":7,"trace":"x"}')
    assert isinstance(req, ListProvidersRequest)  # nosec B101


@pytest.mark.parametrize("line", ["not json", "", "   ", "{\"type\":", "[1, 2]", "42", "null"])
def test_malformed_or_non_object_json_is_parse_error(line):
    with pytest.raises(RequestParseError) as ei:
        parse_request(line)
    assert ei.value.message == "parse error"  # nosec B101
    assert ei.value.detail  # nosec B101


def test_unknown_type_is_reported():
    with pytest.raises(RequestParseError) as ei:
        parse_request('{"type":"completion"}')
    assert ei.value.message == "unknown request type: 'completion'"  # nosec B101


def test_missing_type_is_unknown_type():
    with pytest.raises(RequestParseError) as ei:
        parse_request('{"provider":"openai"}')
    assert ei.value.message == "unknown request type: None"  # nosec B101


def test_missing_provider_is_invalid_request():
    with pytest.raises(RequestParseError) as ei:
        parse_request('{"type":"list_models"}')
    assert ei.value.message.startswith("invalid request: provider")  # nosec B101
