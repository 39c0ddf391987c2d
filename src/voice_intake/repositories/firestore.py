"""Cloud Firestore backend for the document-store contract."""

from __future__ import annotations

import logging
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .base import Document, DocumentData, DocumentStoreError

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """Adapt ``google.cloud.firestore.AsyncClient`` to ``DocumentStore``.

    Timeouts and retries are left to the client library defaults; any API
    failure is re-raised as ``DocumentStoreError``.
    """

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, *, project: str | None, database: str) -> "FirestoreDocumentStore":
        client = firestore.AsyncClient(project=project, database=database)
        return cls(client)

    async def get_document(self, path: str) -> DocumentData | None:
        try:
            snapshot = await self._client.document(path).get()
        except GoogleAPIError as exc:
            raise DocumentStoreError(f"Failed to read {path}") from exc
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def query(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        limit: int | None = None,
    ) -> list[Document]:
        query = self._client.collection(collection).where(
            filter=FieldFilter(field_name, "==", value)
        )
        if limit is not None:
            query = query.limit(limit)
        documents: list[Document] = []
        try:
            async for snapshot in query.stream():
                documents.append(
                    Document(
                        id=snapshot.id,
                        path=snapshot.reference.path,
                        data=snapshot.to_dict() or {},
                    )
                )
        except GoogleAPIError as exc:
            raise DocumentStoreError(f"Failed to query {collection}") from exc
        return documents

    async def set_document(self, path: str, data: DocumentData) -> None:
        try:
            await self._client.document(path).set(data)
        except GoogleAPIError as exc:
            raise DocumentStoreError(f"Failed to write {path}") from exc
        logger.debug("Firestore document written", extra={"path": path})


__all__ = ["FirestoreDocumentStore"]
