"""HTTP surface of the issue tracker: request decoding, handlers, server."""

from issuetracker.api.handlers import create_issue, delete_issue, list_issues, update_issue
from issuetracker.api.request import RequestBodyError, parse_body, parse_query
from issuetracker.api.server import IssueTrackerServer, make_server, run_server

__all__ = [
    "IssueTrackerServer",
    "RequestBodyError",
    "create_issue",
    "delete_issue",
    "list_issues",
    "make_server",
    "parse_body",
    "parse_query",
    "run_server",
    "update_issue",
]
