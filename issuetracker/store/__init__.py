"""In-memory issue storage (projects, issues, filters)."""

from issuetracker.store.schemas import UPDATABLE_FIELDS, Issue
from issuetracker.store.filters import matches, parse_bool
from issuetracker.store.issue_store import IssueStore

__all__ = [
    "Issue",
    "IssueStore",
    "UPDATABLE_FIELDS",
    "matches",
    "parse_bool",
]
