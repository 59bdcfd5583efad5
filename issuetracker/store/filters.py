"""Matching issues against query-string filters.

Filter values arrive as strings. Each field is compared after an explicit
coercion step for its type: booleans accept "true"/"false", timestamps are
compared in their ISO 8601 wire form, everything else by exact string.
"""

from collections.abc import Mapping
from typing import Any

from issuetracker.store.schemas import Issue

BOOLEAN_FIELDS = frozenset({"open"})


def parse_bool(value: Any) -> bool | None:
    """Return the bool for a bool or "true"/"false" string, else None."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def _field_matches(key: str, actual: Any, expected: Any) -> bool:
    if key in BOOLEAN_FIELDS:
        wanted = parse_bool(expected)
        return wanted is not None and wanted == actual
    return str(expected) == actual


def matches(issue: Issue, filters: Mapping[str, Any] | None) -> bool:
    """True when the issue satisfies every filter (no filters match all).

    A key naming a field the issue does not have never matches.
    """
    if not filters:
        return True
    data = issue.to_json()
    for key, expected in filters.items():
        if key not in data:
            return False
        if not _field_matches(key, data[key], expected):
            return False
    return True
