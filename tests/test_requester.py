"""Tests for the completion requester and its continuation policy."""

import dataclasses
from unittest.mock import Mock

import pytest

from textshaper.errors import TransportError, UnexpectedStatusCodeError
from textshaper.llm.codec import ChatCompletion, ChatMessage, Choice, CreateChatCompletion, Usage
from textshaper.shaping.requester import CONTINUE_DIRECTIVE, CompletionRequester


def completion(*choices):
    return ChatCompletion(
        id="chatcmpl-1",
        choices=tuple(
            Choice(index=i, message=ChatMessage(role="assistant", content=content), finish_reason=reason)
            for i, (content, reason) in enumerate(choices)
        ),
    )


def make_client(*responses):
    """Substitute client whose send returns (or raises) the given responses in order."""
    client = Mock()
    client.make_request.side_effect = lambda prompt: CreateChatCompletion(
        model="gpt-4o", messages=(ChatMessage(role="user", content=prompt),)
    )
    client.send.side_effect = list(responses)
    return client


def test_returns_first_choice_content():
    client = make_client(completion(("first", "stop"), ("second", "stop")))

    assert CompletionRequester(client).request("hi") == "first"
    client.make_request.assert_called_once_with("hi")


def test_empty_choices_is_empty_result():
    client = make_client(completion())

    assert CompletionRequester(client).request("hi") == ""


def test_transport_error_propagates_with_context():
    client = make_client(TransportError("request failed: refused"))

    with pytest.raises(TransportError) as exc_info:
        CompletionRequester(client).request("hi")

    assert "failed to send chat message" in exc_info.value.__notes__


def test_status_error_keeps_its_type():
    client = make_client(UnexpectedStatusCodeError(401, "invalid api key"))

    with pytest.raises(UnexpectedStatusCodeError) as exc_info:
        CompletionRequester(client).request("hi")

    assert exc_info.value.status_code == 401


def test_truncated_returned_as_is_by_default():
    client = make_client(completion(("partial", "length")), completion(("rest", "stop")))

    assert CompletionRequester(client).request("hi") == "partial"
    assert client.send.call_count == 1


def test_truncated_continues_when_enabled():
    client = make_client(completion(("part one, ", "length")), completion(("part two", "stop")))

    result = CompletionRequester(client, max_attempts=3).request("hi")

    assert result == "part one, part two"
    assert client.send.call_count == 2
    first_request = client.send.call_args_list[0].args[0]
    second_request = client.send.call_args_list[1].args[0]
    assert len(first_request.messages) == 1
    assert [m.role for m in second_request.messages] == ["user", "assistant", "system"]
    assert second_request.messages[1].content == "part one, "
    assert second_request.messages[2].content == CONTINUE_DIRECTIVE


def test_continuation_bounded_by_attempts():
    client = make_client(
        completion(("a", "length")),
        completion(("b", "length")),
        completion(("c", "length")),
    )

    assert CompletionRequester(client, max_attempts=2).request("hi") == "ab"
    assert client.send.call_count == 2


def test_continuation_stops_on_empty_choices():
    client = make_client(completion(("a", "length")), completion())

    assert CompletionRequester(client, max_attempts=5).request("hi") == "a"


def test_invalid_attempt_bound():
    with pytest.raises(ValueError):
        CompletionRequester(Mock(), max_attempts=0)


def test_usage_returned_with_text():
    client = make_client(dataclasses.replace(completion(("done", "stop")), usage=Usage(3, 4, 7)))

    assert CompletionRequester(client).request_with_usage("hi") == ("done", Usage(3, 4, 7))


def test_usage_summed_over_continuations():
    client = make_client(
        dataclasses.replace(completion(("a", "length")), usage=Usage(10, 5, 15)),
        dataclasses.replace(completion(("b", "stop")), usage=Usage(20, 3, 23)),
    )

    text, usage = CompletionRequester(client, max_attempts=2).request_with_usage("hi")

    assert text == "ab"
    assert usage == Usage(30, 8, 38)


def test_usage_none_when_not_reported():
    client = make_client(completion(("done", "stop")))

    assert CompletionRequester(client).request_with_usage("hi") == ("done", None)
