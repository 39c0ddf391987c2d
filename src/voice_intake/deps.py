"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from .core.config import Settings, get_settings
from .db.store import get_document_store
from .models import Principal
from .repositories import CredentialRepository, DocumentStore, RecordRepository
from .schemas.intake import IntakeRequest
from .services import CredentialResolver, TaskIntakeService


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""

    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
DocumentStoreDependency = Annotated[DocumentStore, Depends(get_document_store)]


def get_credential_resolver(
    store: DocumentStoreDependency,
    settings: SettingsDependency,
) -> CredentialResolver:
    repository = CredentialRepository(
        store,
        token_collection=settings.token_collection,
        user_collection=settings.user_collection,
        firm_collection=settings.firm_collection,
        firm_token_field=settings.firm_token_field,
    )
    return CredentialResolver(
        repository,
        model=settings.credential_model,
        firm_actor_id=settings.firm_actor_id,
    )


def get_intake_service(
    store: DocumentStoreDependency,
    settings: SettingsDependency,
) -> TaskIntakeService:
    repository = RecordRepository(
        store,
        firm_collection=settings.firm_collection,
        user_collection=settings.user_collection,
    )
    return TaskIntakeService(repository, strict_iso_dates=settings.strict_iso_dates)


async def require_principal(
    request: Request,
    settings: SettingsDependency,
    resolver: Annotated[CredentialResolver, Depends(get_credential_resolver)],
) -> Principal:
    """Authenticate the request from the configured token header."""

    return await resolver.resolve(request.headers.get(settings.token_header))


CurrentPrincipalDependency = Annotated[Principal, Depends(require_principal)]


async def read_intake_payload(request: Request, _principal: CurrentPrincipalDependency) -> IntakeRequest:
    """Decode the intake body once the caller is authenticated."""

    body = await request.body()
    try:
        return IntakeRequest.model_validate_json(body)
    except PydanticValidationError as exc:
        errors = [{**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)]
        raise RequestValidationError(errors, body=body) from exc


IntakePayloadDependency = Annotated[IntakeRequest, Depends(read_intake_payload)]
IntakeServiceDependency = Annotated[TaskIntakeService, Depends(get_intake_service)]


__all__ = [
    "CurrentPrincipalDependency",
    "DocumentStoreDependency",
    "IntakePayloadDependency",
    "IntakeServiceDependency",
    "SettingsDependency",
    "get_app_settings",
    "get_credential_resolver",
    "get_intake_service",
    "read_intake_payload",
    "require_principal",
]
