"""In-process document store for local development and tests."""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from .base import Document, DocumentData, DocumentStoreError


class InMemoryDocumentStore:
    """Keep documents in a dict keyed by their full path.

    Reads and writes are counted so callers can assert how many store
    round-trips a request performed.
    """

    def __init__(self, documents: dict[str, DocumentData] | None = None) -> None:
        self._documents: dict[str, DocumentData] = {}
        self._lock = asyncio.Lock()
        self.reads = 0
        self.writes = 0
        for path, data in (documents or {}).items():
            self._documents[self._validate_document_path(path)] = copy.deepcopy(data)

    @staticmethod
    def _validate_document_path(path: str) -> str:
        segments = path.split("/")
        if len(segments) % 2 or any(not segment for segment in segments):
            raise DocumentStoreError(f"Not a document path: {path!r}")
        return path

    @staticmethod
    def _validate_collection_path(path: str) -> str:
        segments = path.split("/")
        if not len(segments) % 2 or any(not segment for segment in segments):
            raise DocumentStoreError(f"Not a collection path: {path!r}")
        return path

    @property
    def paths(self) -> list[str]:
        return sorted(self._documents)

    def peek(self, path: str) -> DocumentData | None:
        """Return a copy of a document without counting it as a read."""
        data = self._documents.get(path)
        return copy.deepcopy(data) if data is not None else None

    async def get_document(self, path: str) -> DocumentData | None:
        self._validate_document_path(path)
        async with self._lock:
            self.reads += 1
            data = self._documents.get(path)
            return copy.deepcopy(data) if data is not None else None

    async def query(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        limit: int | None = None,
    ) -> list[Document]:
        self._validate_collection_path(collection)
        prefix = f"{collection}/"
        matches: list[Document] = []
        async with self._lock:
            self.reads += 1
            for path, data in self._documents.items():
                if not path.startswith(prefix) or "/" in path[len(prefix):]:
                    continue
                if field_name in data and data[field_name] == value:
                    matches.append(
                        Document(id=path[len(prefix):], path=path, data=copy.deepcopy(data))
                    )
                    if limit is not None and len(matches) >= limit:
                        break
        return matches

    async def set_document(self, path: str, data: DocumentData) -> None:
        self._validate_document_path(path)
        async with self._lock:
            self.writes += 1
            self._documents[path] = copy.deepcopy(data)


__all__ = ["InMemoryDocumentStore"]
