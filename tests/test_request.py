"""Tests for query string and request body decoding."""

import json

import pytest

from issuetracker.api.request import RequestBodyError, content_length, parse_body, parse_query

FORM = "application/x-www-form-urlencoded"


def test_parse_query_last_value_wins() -> None:
    """Repeated keys keep the last value; blank values are kept."""
    assert parse_query("open=true&created_by=a&created_by=b&assigned_to=") == {
        "open": "true",
        "created_by": "b",
        "assigned_to": "",
    }


def test_parse_query_empty() -> None:
    assert parse_query("") == {}


def test_parse_body_json_object() -> None:
    assert parse_body(b'{"_id": "1", "open": false}', "application/json") == {"_id": "1", "open": False}


def test_parse_body_without_content_type_is_json() -> None:
    assert parse_body(b'{"a": 1}') == {"a": 1}


def test_parse_body_form() -> None:
    """Form posts are decoded, including percent-escapes and blanks."""
    body = b"issue_title=Hello%20world&assigned_to=&open=false"
    assert parse_body(body, FORM + "; charset=utf-8") == {
        "issue_title": "Hello world",
        "assigned_to": "",
        "open": "false",
    }


def test_parse_body_empty() -> None:
    assert parse_body(b"", "application/json") == {}
    assert parse_body(b"   ", "application/json") == {}


def test_parse_body_malformed_json_raises() -> None:
    with pytest.raises(json.JSONDecodeError):
        parse_body(b"{not json", "application/json")


def test_parse_body_non_object_raises() -> None:
    """A JSON array or scalar is not a request body."""
    with pytest.raises(RequestBodyError, match="list"):
        parse_body(b"[1, 2]", "application/json")


def test_content_length_valid() -> None:
    """Absent or blank header means no body; digits are the length."""
    assert content_length(None) == 0
    assert content_length("") == 0
    assert content_length("0") == 0
    assert content_length("42") == 42


def test_content_length_negative_raises() -> None:
    """A negative length would read until the client closes the socket."""
    with pytest.raises(RequestBodyError, match="-1"):
        content_length("-1")


def test_content_length_not_a_number_raises() -> None:
    with pytest.raises(RequestBodyError, match="Content-Length"):
        content_length("ten")


def test_chunked_transfer_encoding_raises() -> None:
    """Chunked bodies are rejected instead of being read as empty."""
    with pytest.raises(RequestBodyError, match="Chunked"):
        content_length(None, "chunked")
    with pytest.raises(RequestBodyError, match="Chunked"):
        content_length("10", "gzip, Chunked")
