"""In-memory issue storage keyed by project name.

One insertion-ordered list of issues per project. The store is built once at
startup and handed to the request handlers; every operation runs under a
single lock because the HTTP server handles requests on threads. Callers get
copies, never the stored records.
"""

import logging
import threading
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from issuetracker.store.filters import matches
from issuetracker.store.schemas import UPDATABLE_FIELDS, Issue

LOG = logging.getLogger("issuetracker.store")

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return uuid.uuid4().hex


class IssueStore:
    """Process-wide mapping of project name to its issues."""

    def __init__(self, clock: Clock | None = None, id_factory: IdFactory | None = None) -> None:
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id
        self._projects: dict[str, list[Issue]] = {}
        # Every id ever handed out, deleted ones included, so none is reused.
        # Grows by one short string per create for the life of the process;
        # with the uuid4 default only an injected id_factory can collide.
        self._issued_ids: set[str] = set()
        self._lock = threading.RLock()

    def _next_id(self) -> str:
        issue_id = self._id_factory()
        while issue_id in self._issued_ids:
            issue_id = self._id_factory()
        self._issued_ids.add(issue_id)
        return issue_id

    def _index_of(self, project: str, issue_id: str) -> int | None:
        for index, issue in enumerate(self._projects.get(project, ())):
            if issue.id == issue_id:
                return index
        return None

    def projects(self) -> list[str]:
        """Names of projects that currently hold at least one issue."""
        with self._lock:
            return [name for name, issues in self._projects.items() if issues]

    def list(self, project: str, filters: Mapping[str, Any] | None = None) -> list[Issue]:
        """Issues of the project matching all filters, in insertion order.

        Unknown projects yield an empty list.
        """
        with self._lock:
            return [issue.model_copy() for issue in self._projects.get(project, ()) if matches(issue, filters)]

    def get(self, project: str, issue_id: str) -> Issue | None:
        """Return a copy of the issue, or None if the project has no such id."""
        with self._lock:
            index = self._index_of(project, issue_id)
            if index is None:
                return None
            return self._projects[project][index].model_copy()

    def create(
        self,
        project: str,
        issue_title: str,
        issue_text: str,
        created_by: str,
        assigned_to: str = "",
        status_text: str = "",
    ) -> Issue:
        """Append a new open issue to the project and return it."""
        with self._lock:
            now = self._clock()
            issue = Issue(
                id=self._next_id(),
                issue_title=issue_title,
                issue_text=issue_text,
                created_by=created_by,
                assigned_to=assigned_to,
                status_text=status_text,
                created_on=now,
                updated_on=now,
                open=True,
            )
            self._projects.setdefault(project, []).append(issue)
        LOG.info("Created issue %s in project %r", issue.id, project)
        return issue.model_copy()

    def update(self, project: str, issue_id: str, changes: Mapping[str, Any]) -> Issue | None:
        """Apply changes to the issue and refresh updated_on.

        Returns the updated issue, or None when the project has no such id.
        Raises ValueError for fields that are not updatable.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        with self._lock:
            index = self._index_of(project, issue_id)
            if index is None:
                return None
            current = self._projects[project][index]
            data = current.model_dump()
            data.update(changes)
            data["updated_on"] = max(self._clock(), current.created_on)
            updated = Issue.model_validate(data)
            self._projects[project][index] = updated
        LOG.info("Updated issue %s in project %r (%s)", issue_id, project, ", ".join(sorted(changes)))
        return updated.model_copy()

    def delete(self, project: str, issue_id: str) -> bool:
        """Remove the issue from the project. False if it was not there."""
        with self._lock:
            index = self._index_of(project, issue_id)
            if index is None:
                return False
            del self._projects[project][index]
        LOG.info("Deleted issue %s from project %r", issue_id, project)
        return True
