"""Assemble task and note records from dictated input and route them."""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable

from ..errors import ValidationError
from ..models import (
    DEFAULT_PRIORITY,
    PREPARER_ROLE,
    NoteRecord,
    Principal,
    TaskRecord,
    TeamMember,
)
from ..repositories.records import RecordRepository
from ..schemas.intake import IntakeRequest
from .dates import normalize_due_date
from .job_types import normalize_job_type

logger = logging.getLogger(__name__)

ADD_TASK = "addTask"
ADD_NOTE = "addNote"
DESCRIPTION_SEPARATOR = " | "

_BASE36 = string.digits + string.ascii_lowercase
_AUTO_ID_ALPHABET = string.ascii_letters + string.digits

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``2024-12-25T03:04:05.678Z``."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_task_id(moment: datetime) -> str:
    """Epoch milliseconds plus seven random base36 characters."""
    millis = int(moment.timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{millis}-{suffix}"


def generate_note_id() -> str:
    return "".join(secrets.choice(_AUTO_ID_ALPHABET) for _ in range(20))


def build_description(raw_job_type: str, matched: bool, notes: str) -> str:
    parts: list[str] = []
    if raw_job_type and not matched:
        parts.append(f"[Job type: {raw_job_type}]")
    if notes:
        parts.append(notes)
    return DESCRIPTION_SEPARATOR.join(parts)


def build_summary(job_type: str, client: str, due_date: str, raw_job_type: str, matched: bool) -> str:
    summary = f"Task added: {job_type} for {client}. Due: {due_date or 'No due date'}."
    if raw_job_type and not matched:
        summary += f' (Job type "{raw_job_type}" mapped to Other)'
    return summary


async def _write_detached(write: Awaitable[None], path: str) -> None:
    """Await ``write`` but let it finish if the caller is cancelled."""
    task = asyncio.ensure_future(write)
    try:
        await asyncio.shield(task)
    except asyncio.CancelledError:
        task.add_done_callback(lambda done: _log_abandoned_write(done, path))
        raise


def _log_abandoned_write(task: asyncio.Future[None], path: str) -> None:
    if task.cancelled() or task.exception() is None:
        return
    logger.error(
        "Write failed after the request was cancelled",
        exc_info=task.exception(),
        extra={"path": path},
    )


@dataclass(slots=True)
class TaskOutcome:
    """Result of a successful ``addTask``."""

    task_id: str
    path: str
    message: str
    record: TaskRecord
    job_type_matched: bool


@dataclass(slots=True)
class NoteOutcome:
    """Result of a successful ``addNote``."""

    note_id: str
    path: str
    message: str
    record: NoteRecord


class TaskIntakeService:
    """Turn one intake request into exactly one stored record."""

    def __init__(
        self,
        repository: RecordRepository,
        *,
        strict_iso_dates: bool = False,
        clock: Clock = _utcnow,
    ) -> None:
        self._repository = repository
        self._strict_iso_dates = strict_iso_dates
        self._clock = clock

    async def handle(self, principal: Principal, payload: IntakeRequest) -> TaskOutcome | NoteOutcome:
        """Dispatch on ``payload.action`` (``addTask`` when omitted)."""
        action = _clean(payload.action) or ADD_TASK
        if action == ADD_TASK:
            return await self.create_task(
                principal,
                client=payload.client,
                job_type=payload.job_type,
                due_date=payload.due_date,
                priority=payload.priority,
                notes=payload.notes if payload.notes is not None else payload.text,
            )
        if action == ADD_NOTE:
            return await self.create_note(principal, payload.text)
        raise ValidationError(
            'Invalid action. Use "addTask" or "addNote".',
            code="invalid_action",
            details={"action": action},
        )

    async def create_task(
        self,
        principal: Principal,
        *,
        client: str | None,
        job_type: str | None = None,
        due_date: str | None = None,
        priority: str | None = None,
        notes: str | None = None,
    ) -> TaskOutcome:
        client_name = _clean(client)
        if not client_name:
            raise ValidationError("Missing or empty client field.", code="missing_client")

        raw_job_type = _clean(job_type)
        match = normalize_job_type(raw_job_type)
        normalized_due = normalize_due_date(due_date, strict_iso=self._strict_iso_dates)
        now = self._clock()
        task_id = generate_task_id(now)

        record = TaskRecord(
            client=client_name,
            description=build_description(raw_job_type, match.matched, _clean(notes)),
            job_type=match.job_type,
            due_date=normalized_due,
            priority=_clean(priority) or DEFAULT_PRIORITY,
            team=[TeamMember(uid=principal.user_id, role=PREPARER_ROLE)],
            team_member_uids=[principal.user_id],
            assigned_to=principal.user_id,
            created_by=principal.user_id,
            created_at=format_timestamp(now),
        )
        path = self._repository.task_path(principal, task_id)
        await _write_detached(self._repository.add_task(path, record), path)

        logger.info(
            "Task created",
            extra={
                "task_id": task_id,
                "path": path,
                "job_type": match.job_type.value,
                "job_type_matched": match.matched,
                "has_due_date": bool(normalized_due),
            },
        )
        return TaskOutcome(
            task_id=task_id,
            path=path,
            message=build_summary(
                match.job_type.value,
                client_name,
                normalized_due,
                raw_job_type,
                match.matched,
            ),
            record=record,
            job_type_matched=match.matched,
        )

    async def create_note(self, principal: Principal, text: str | None) -> NoteOutcome:
        body = _clean(text)
        if not body:
            raise ValidationError("Missing or empty text field.", code="missing_text")

        note_id = generate_note_id()
        record = NoteRecord(
            text=body,
            created_by=principal.user_id,
            created_at=format_timestamp(self._clock()),
        )
        path = self._repository.note_path(principal, note_id)
        await _write_detached(self._repository.add_note(path, record), path)

        logger.info("Note created", extra={"note_id": note_id, "path": path})
        return NoteOutcome(note_id=note_id, path=path, message="Note added.", record=record)


__all__ = [
    "ADD_NOTE",
    "ADD_TASK",
    "NoteOutcome",
    "TaskIntakeService",
    "TaskOutcome",
    "build_description",
    "build_summary",
    "format_timestamp",
    "generate_task_id",
]
