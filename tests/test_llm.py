"""Tests for utils.llm — the Anthropic client is always mocked."""

from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from core.errors import TransportError
from utils.llm import TRUNCATION_MARKER, call_llm, get_client


def _stream_client(chunks, stop_reason="end_turn"):
    """A fake client whose messages.stream() yields `chunks`."""
    stream = MagicMock()
    stream.text_stream = iter(chunks)
    stream.get_final_message.return_value = MagicMock(stop_reason=stop_reason)

    context = MagicMock()
    context.__enter__.return_value = stream
    context.__exit__.return_value = False

    client = MagicMock()
    client.messages.stream.return_value = context
    return client


def _request():
    return httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def test_get_client_without_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(TransportError, match="ANTHROPIC_API_KEY"):
        get_client()


@patch("utils.llm.anthropic.Anthropic")
def test_get_client_passes_timeout(mock_cls, monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    get_client()
    assert mock_cls.call_args.kwargs["timeout"] == 600


@patch("utils.llm.get_client")
def test_call_llm_joins_stream(mock_get_client):
    mock_get_client.return_value = _stream_client(["<html>", "</html>"])
    assert call_llm("system", "user") == "<html></html>"


@patch("utils.llm.get_client")
def test_call_llm_marks_truncation(mock_get_client):
    mock_get_client.return_value = _stream_client(['{"type": "multi-'], stop_reason="max_tokens")
    text = call_llm("system", "user")
    assert text.endswith(TRUNCATION_MARKER)


@patch("utils.llm.time.sleep")
@patch("utils.llm.get_client")
def test_call_llm_retries_connection_error_once(mock_get_client, mock_sleep):
    client = _stream_client(["ok"])
    good_context = client.messages.stream.return_value
    client.messages.stream.side_effect = [
        anthropic.APIConnectionError(request=_request()),
        good_context,
    ]
    mock_get_client.return_value = client

    assert call_llm("system", "user") == "ok"
    assert client.messages.stream.call_count == 2


@patch("utils.llm.time.sleep")
@patch("utils.llm.get_client")
def test_call_llm_gives_up_after_second_connection_error(mock_get_client, mock_sleep):
    client = MagicMock()
    client.messages.stream.side_effect = anthropic.APIConnectionError(request=_request())
    mock_get_client.return_value = client

    with pytest.raises(TransportError, match="unreachable"):
        call_llm("system", "user")
    assert client.messages.stream.call_count == 2


@patch("utils.llm.get_client")
def test_call_llm_wraps_api_error(mock_get_client):
    client = MagicMock()
    client.messages.stream.side_effect = anthropic.APIError("overloaded", request=_request(), body=None)
    mock_get_client.return_value = client

    with pytest.raises(TransportError, match="overloaded"):
        call_llm("system", "user")
    assert client.messages.stream.call_count == 1
