"""Domain models for the intake pipeline."""

from __future__ import annotations

from .job_type import JobType
from .principal import Principal
from .records import (
    DEFAULT_PRIORITY,
    INITIAL_TASK_STATUS,
    PREPARER_ROLE,
    NoteRecord,
    TaskRecord,
    TeamMember,
)

__all__ = [
    "DEFAULT_PRIORITY",
    "INITIAL_TASK_STATUS",
    "JobType",
    "NoteRecord",
    "PREPARER_ROLE",
    "Principal",
    "TaskRecord",
    "TeamMember",
]
