"""Issue record as held in the store and returned by the API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Fields a client may change after creation. _id and both timestamps are
# owned by the store.
UPDATABLE_FIELDS = (
    "issue_title",
    "issue_text",
    "created_by",
    "assigned_to",
    "status_text",
    "open",
)


class Issue(BaseModel):
    """Single issue belonging to one project."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: str = Field(..., alias="_id", description="Opaque unique id assigned at creation")
    issue_title: str = Field(..., description="Issue title")
    issue_text: str = Field(..., description="Issue body")
    created_by: str = Field(..., description="Reporter name")
    assigned_to: str = Field(default="", description="Assignee name, empty when unassigned")
    status_text: str = Field(default="", description="Free-form status note")
    created_on: datetime = Field(..., description="When the issue was created (UTC)")
    updated_on: datetime = Field(..., description="When the issue was last updated (UTC)")
    open: bool = Field(default=True, description="False once the issue is closed")

    def to_json(self) -> dict[str, Any]:
        """Wire representation: `_id` key and ISO 8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)
