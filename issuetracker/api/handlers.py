"""Request handling for /api/issues/{project}.

Each handler takes the store, the project name and the decoded request data
and returns the JSON payload. Validation failures are ordinary payloads
({"error": ...}) answered with HTTP 200, which clients of this API rely on.
"""

import logging
from collections.abc import Mapping
from typing import Any

from issuetracker.store import UPDATABLE_FIELDS, IssueStore, parse_bool

LOG = logging.getLogger("issuetracker.api.handlers")

REQUIRED_FIELDS = ("issue_title", "issue_text", "created_by")
OPTIONAL_FIELDS = ("assigned_to", "status_text")

ERROR_REQUIRED_MISSING = "required field(s) missing"
ERROR_MISSING_ID = "missing _id"
ERROR_NO_UPDATE_FIELDS = "no update field(s) sent"
ERROR_COULD_NOT_UPDATE = "could not update"
ERROR_COULD_NOT_DELETE = "could not delete"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def list_issues(store: IssueStore, project: str, query: Mapping[str, Any]) -> list[dict[str, Any]]:
    """GET: issues of the project matching every query filter."""
    return [issue.to_json() for issue in store.list(project, query)]


def create_issue(store: IssueStore, project: str, body: Mapping[str, Any]) -> dict[str, Any]:
    """POST: create an issue from the required and optional fields."""
    if not all(body.get(field) for field in REQUIRED_FIELDS):
        LOG.debug("Create rejected for project %r: missing required fields", project)
        return {"error": ERROR_REQUIRED_MISSING}
    fields = {field: _text(body.get(field)) for field in REQUIRED_FIELDS + OPTIONAL_FIELDS}
    issue = store.create(project, **fields)
    return issue.to_json()


def _coerce_changes(body: Mapping[str, Any]) -> dict[str, Any] | None:
    """Pick updatable fields from body; None if a value cannot be coerced."""
    changes: dict[str, Any] = {}
    for field in UPDATABLE_FIELDS:
        if field not in body:
            continue
        if field == "open":
            value = parse_bool(body[field])
            if value is None:
                return None
            changes[field] = value
        else:
            changes[field] = _text(body[field])
    return changes


def update_issue(store: IssueStore, project: str, body: Mapping[str, Any]) -> dict[str, Any]:
    """PUT: apply the supplied fields to the issue named by _id."""
    raw_id = body.get("_id")
    if not raw_id:
        return {"error": ERROR_MISSING_ID}
    issue_id = _text(raw_id)

    if not any(field in body for field in UPDATABLE_FIELDS):
        return {"error": ERROR_NO_UPDATE_FIELDS, "_id": issue_id}

    changes = _coerce_changes(body)
    if changes is None:
        LOG.debug("Update of %s rejected: open=%r is not a boolean", issue_id, body.get("open"))
        return {"error": ERROR_COULD_NOT_UPDATE, "_id": issue_id}

    if store.update(project, issue_id, changes) is None:
        return {"error": ERROR_COULD_NOT_UPDATE, "_id": issue_id}
    return {"result": "successfully updated", "_id": issue_id}


def delete_issue(store: IssueStore, project: str, body: Mapping[str, Any]) -> dict[str, Any]:
    """DELETE: remove the issue named by _id."""
    raw_id = body.get("_id")
    if not raw_id:
        return {"error": ERROR_MISSING_ID}
    issue_id = _text(raw_id)

    if not store.delete(project, issue_id):
        return {"error": ERROR_COULD_NOT_DELETE, "_id": issue_id}
    return {"result": "successfully deleted", "_id": issue_id}
