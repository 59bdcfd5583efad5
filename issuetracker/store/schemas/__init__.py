"""Schemas for records held by the issue store."""

from issuetracker.store.schemas.issue import UPDATABLE_FIELDS, Issue

__all__ = ["Issue", "UPDATABLE_FIELDS"]
