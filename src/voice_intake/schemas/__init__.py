"""Pydantic schemas exposed by the intake API."""

from __future__ import annotations

from .intake import (
    IntakeRequest,
    IntakeResponse,
    NoteCreatedResponse,
    TaskCreatedResponse,
    TaskEcho,
)
from .system import ErrorResponse, HealthCheckResponse, RootResponse

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "IntakeRequest",
    "IntakeResponse",
    "NoteCreatedResponse",
    "RootResponse",
    "TaskCreatedResponse",
    "TaskEcho",
]
