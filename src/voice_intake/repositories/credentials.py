"""Read access to tokens, user profiles and firms."""

from __future__ import annotations

from typing import Any

from .base import Document, DocumentData, DocumentStore, join_path


class CredentialRepository:
    """Look up the documents needed to authenticate an intake token."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        token_collection: str = "siriTokens",
        user_collection: str = "users",
        firm_collection: str = "firms",
        firm_token_field: str = "siriToken",
    ) -> None:
        self._store = store
        self._token_collection = token_collection
        self._user_collection = user_collection
        self._firm_collection = firm_collection
        self._firm_token_field = firm_token_field

    async def get_token(self, token: str) -> DocumentData | None:
        """Return the credential document keyed by ``token``."""
        return await self._store.get_document(join_path(self._token_collection, token))

    async def get_profile(self, user_id: str) -> DocumentData | None:
        """Return the user profile holding the optional ``firmId``."""
        return await self._store.get_document(join_path(self._user_collection, user_id))

    async def find_firm_by_token(self, token: str) -> Document | None:
        """Return the firm whose stored shared secret equals ``token``."""
        matches = await self._store.query(
            self._firm_collection,
            self._firm_token_field,
            token,
            limit=1,
        )
        return matches[0] if matches else None


def read_string(data: DocumentData | None, key: str) -> str | None:
    """Return a non-blank string field, or ``None``."""

    if not data:
        return None
    value: Any = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


__all__ = ["CredentialRepository", "read_string"]
