"""Service layer for the intake pipeline."""

from __future__ import annotations

from .credentials import CredentialResolver
from .dates import normalize_due_date
from .intake import NoteOutcome, TaskIntakeService, TaskOutcome
from .job_types import JOB_TYPE_ALIASES, JobTypeMatch, normalize_job_type

__all__ = [
    "CredentialResolver",
    "JOB_TYPE_ALIASES",
    "JobTypeMatch",
    "NoteOutcome",
    "TaskIntakeService",
    "TaskOutcome",
    "normalize_due_date",
    "normalize_job_type",
]
