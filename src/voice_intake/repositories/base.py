"""Document-store contract shared by every persistence backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

DocumentData = dict[str, Any]


class DocumentStoreError(RuntimeError):
    """Raised when a backend read or write fails."""


@dataclass(slots=True)
class Document:
    """A stored document together with its id and slash-separated path."""

    id: str
    path: str
    data: DocumentData = field(default_factory=dict)


@runtime_checkable
class DocumentStore(Protocol):
    """Minimal hierarchical document store used by the intake pipeline.

    Paths alternate collection and document segments, e.g.
    ``firms/acme/tasks/1700000000000-abc1234``.
    """

    async def get_document(self, path: str) -> DocumentData | None:
        """Return the document at ``path`` or ``None`` when it does not exist."""
        ...

    async def query(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents of ``collection`` whose ``field_name`` equals ``value``."""
        ...

    async def set_document(self, path: str, data: DocumentData) -> None:
        """Create or overwrite the document at ``path`` in a single write."""
        ...


def join_path(*segments: str) -> str:
    """Join path segments, rejecting segments that would break the hierarchy."""

    cleaned: list[str] = []
    for segment in segments:
        if not segment or "/" in segment:
            raise ValueError(f"Invalid document path segment: {segment!r}")
        cleaned.append(segment)
    return "/".join(cleaned)


__all__ = [
    "Document",
    "DocumentData",
    "DocumentStore",
    "DocumentStoreError",
    "join_path",
]
