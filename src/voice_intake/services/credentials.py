"""Resolve the shared-secret token sent by the shortcut to a principal."""

from __future__ import annotations

import logging

from fastapi import status

from ..core.config import CredentialModel
from ..errors import InvalidCredentialError, MissingCredentialError
from ..models import Principal
from ..repositories.credentials import CredentialRepository, read_string

logger = logging.getLogger(__name__)

_MAX_DOCUMENT_ID_BYTES = 1500


def _is_document_id(token: str) -> bool:
    """Whether ``token`` can name a document in the token collection."""
    if "/" in token or token in {".", ".."}:
        return False
    if token.startswith("__") and token.endswith("__"):
        return False
    return len(token.encode("utf-8")) <= _MAX_DOCUMENT_ID_BYTES


class CredentialResolver:
    """Authenticate a token under one of two credential models.

    ``principal``: ``siriTokens/{token}`` names a user (``uid``); the user's
    profile supplies the optional ``firmId``.

    ``firm``: the legacy model where the token is stored on the firm itself
    and every record is attributed to a fixed actor id.
    """

    def __init__(
        self,
        repository: CredentialRepository,
        *,
        model: CredentialModel = "principal",
        firm_actor_id: str = "siri",
    ) -> None:
        self._repository = repository
        self._model = model
        self._firm_actor_id = firm_actor_id

    async def resolve(self, token: str | None) -> Principal:
        if token is None or not token.strip():
            raise MissingCredentialError()
        token = token.strip()
        if self._model == "firm":
            return await self._resolve_firm(token)
        return await self._resolve_principal(token)

    async def _resolve_principal(self, token: str) -> Principal:
        if not _is_document_id(token):
            logger.warning("Rejected token that is not a valid document id")
            raise InvalidCredentialError()
        credential = await self._repository.get_token(token)
        user_id = read_string(credential, "uid")
        if user_id is None:
            logger.warning(
                "Token did not resolve to a principal",
                extra={"credential_found": credential is not None},
            )
            raise InvalidCredentialError()

        profile = await self._repository.get_profile(user_id)
        tenant_id = read_string(profile, "firmId")
        logger.info(
            "Token resolved",
            extra={"user_id": user_id, "tenant_id": tenant_id},
        )
        return Principal(user_id=user_id, tenant_id=tenant_id)

    async def _resolve_firm(self, token: str) -> Principal:
        firm = await self._repository.find_firm_by_token(token)
        if firm is None:
            logger.warning("Token did not match any firm")
            raise InvalidCredentialError(status_code=status.HTTP_403_FORBIDDEN)
        logger.info("Token resolved", extra={"tenant_id": firm.id})
        return Principal(user_id=self._firm_actor_id, tenant_id=firm.id)


__all__ = ["CredentialResolver"]
