"""Decoding query strings and request bodies into flat dicts.

Bodies may be JSON objects or HTML form posts
(application/x-www-form-urlencoded). Repeated keys keep the last value.
Bodies are read by Content-Length only; chunked transfer encoding is rejected.
"""

import json
from typing import Any
from urllib.parse import parse_qsl


class RequestBodyError(ValueError):
    """Raised when a request body cannot be read as a flat object."""


def content_length(header: str | None, transfer_encoding: str | None = None) -> int:
    """Body length from the Content-Length header (absent means no body).

    Raises RequestBodyError for chunked bodies and for lengths that are not a
    non-negative integer.
    """
    if transfer_encoding and "chunked" in transfer_encoding.lower():
        raise RequestBodyError("Chunked request bodies are not supported; send Content-Length")
    if header is None or not header.strip():
        return 0
    try:
        length = int(header)
    except ValueError:
        raise RequestBodyError(f"Invalid Content-Length: {header!r}") from None
    if length < 0:
        raise RequestBodyError(f"Invalid Content-Length: {header!r}")
    return length


def parse_query(query: str) -> dict[str, str]:
    """Parse a query string into a dict (last value wins)."""
    return dict(parse_qsl(query, keep_blank_values=True))


def parse_body(body: bytes, content_type: str = "") -> dict[str, Any]:
    """Parse body as form data or JSON depending on Content-Type.

    Empty body gives an empty dict. Raises json.JSONDecodeError for malformed
    JSON and RequestBodyError for JSON that is not an object.
    """
    if not body:
        return {}
    text = body.decode("utf-8", errors="replace")
    if "application/x-www-form-urlencoded" in content_type:
        return parse_query(text)
    if not text.strip():
        return {}
    data = json.loads(text)
    if not isinstance(data, dict):
        raise RequestBodyError(f"Expected a JSON object, got {type(data).__name__}")
    return data
