"""Request and response schemas for the intake endpoint."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

INTAKE_REQUEST_EXAMPLE = {
    "client": "Smith Family Trust",
    "jobType": "trust return",
    "dueDate": "31/10/2025",
    "priority": "High",
    "notes": "Waiting on bank statements",
}


class IntakeRequest(BaseModel):
    """Body posted by the voice shortcut.

    Every field is optional at the schema level so that a missing ``client``
    is reported by the service with the intake-specific message.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={"example": INTAKE_REQUEST_EXAMPLE},
    )

    action: str | None = Field(default=None, description='"addTask" (default) or "addNote"')
    client: str | None = Field(default=None, description="Client the task is for")
    job_type: str | None = Field(default=None, alias="jobType", description="Free-text job type")
    due_date: str | None = Field(
        default=None,
        alias="dueDate",
        description="Due date as DD/MM/YYYY, D-M-YYYY or YYYY-MM-DD",
    )
    priority: str | None = Field(default=None)
    notes: str | None = Field(default=None)
    text: str | None = Field(default=None, description="Note text, or task notes for legacy callers")


class TaskEcho(BaseModel):
    """Normalised task fields echoed back to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    client: str
    job_type: str = Field(alias="jobType")
    job_type_matched: bool = Field(alias="jobTypeMatched")
    due_date: str = Field(alias="dueDate")
    priority: str
    description: str


class TaskCreatedResponse(BaseModel):
    """Success payload for ``addTask``."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    action: Literal["addTask"] = "addTask"
    task_id: str = Field(alias="taskId")
    message: str
    path: str
    task: TaskEcho


class NoteCreatedResponse(BaseModel):
    """Success payload for ``addNote``."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    action: Literal["addNote"] = "addNote"
    note_id: str = Field(alias="noteId")
    message: str
    path: str


IntakeResponse = Union[TaskCreatedResponse, NoteCreatedResponse]


__all__ = [
    "IntakeRequest",
    "IntakeResponse",
    "NoteCreatedResponse",
    "TaskCreatedResponse",
    "TaskEcho",
]
