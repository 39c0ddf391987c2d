"""Voice shortcut intake endpoint."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...deps import CurrentPrincipalDependency, IntakePayloadDependency, IntakeServiceDependency
from ...schemas.intake import (
    IntakeRequest,
    IntakeResponse,
    NoteCreatedResponse,
    TaskCreatedResponse,
    TaskEcho,
)
from ...services.intake import NoteOutcome


async def create_from_shortcut(
    principal: CurrentPrincipalDependency,
    payload: IntakePayloadDependency,
    service: IntakeServiceDependency,
) -> IntakeResponse:
    """Create a task (or note) for the principal owning the shortcut token."""

    outcome = await service.handle(principal, payload)
    if isinstance(outcome, NoteOutcome):
        return NoteCreatedResponse(note_id=outcome.note_id, message=outcome.message, path=outcome.path)

    record = outcome.record
    return TaskCreatedResponse(
        task_id=outcome.task_id,
        message=outcome.message,
        path=outcome.path,
        task=TaskEcho(
            client=record.client,
            job_type=record.job_type.value,
            job_type_matched=outcome.job_type_matched,
            due_date=record.due_date,
            priority=record.priority,
            description=record.description,
        ),
    )


def build_intake_router(path: str) -> APIRouter:
    """Mount the intake handler at the configured path (POST only)."""

    intake_router = APIRouter(tags=["intake"])
    intake_router.add_api_route(
        path,
        create_from_shortcut,
        methods=["POST"],
        response_model=IntakeResponse,
        status_code=status.HTTP_200_OK,
        summary="Create a task or note from a voice shortcut",
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": IntakeRequest.model_json_schema(by_alias=True)}},
            }
        },
    )
    return intake_router


__all__ = ["build_intake_router", "create_from_shortcut"]
