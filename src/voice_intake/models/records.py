"""Persisted record shapes shared with the web client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .job_type import JobType

INITIAL_TASK_STATUS = "Not Started"
DEFAULT_PRIORITY = "Medium"
PREPARER_ROLE = "Preparer"


class _StoredRecord(BaseModel):
    """Base for documents written to the store with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TeamMember(_StoredRecord):
    uid: str
    role: str = PREPARER_ROLE


class TaskRecord(_StoredRecord):
    """A task as stored beneath ``firms/{id}/tasks`` or ``users/{id}/tasks``."""

    client: str
    description: str = ""
    job_type: JobType = JobType.OTHER
    status: str = INITIAL_TASK_STATUS
    due_date: str = ""
    priority: str = DEFAULT_PRIORITY
    billable: bool = True
    completed: bool = False
    seconds: int = 0
    notes: str = ""
    items: list[dict[str, Any]] = Field(default_factory=list)
    schedules: list[dict[str, Any]] = Field(default_factory=list)
    team: list[TeamMember] = Field(default_factory=list)
    team_member_uids: list[str] = Field(default_factory=list)
    assigned_to: str | None = None
    created_by: str
    created_at: str
    archived_at: str | None = None
    is_recurring: bool = False
    recurrence_pattern: str | None = None
    next_occurrence: str | None = None
    parent_task_id: str | None = None
    depends_on: list[str] = Field(default_factory=list)
    sort_order: int = 0


class NoteRecord(_StoredRecord):
    text: str
    created_by: str
    created_at: str


__all__ = [
    "DEFAULT_PRIORITY",
    "INITIAL_TASK_STATUS",
    "NoteRecord",
    "PREPARER_ROLE",
    "TaskRecord",
    "TeamMember",
]
