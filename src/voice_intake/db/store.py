"""Process-wide document store initialised at application startup."""

from __future__ import annotations

import logging

from ..core.config import Settings, get_settings
from ..repositories.base import DocumentStore
from ..repositories.firestore import FirestoreDocumentStore
from ..repositories.memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)

_store: DocumentStore | None = None


def set_document_store(store: DocumentStore | None) -> None:
    """Inject a specific store instance (tests, local tooling)."""

    global _store
    _store = store


def build_document_store(settings: Settings) -> DocumentStore:
    """Create the backend selected by ``settings.store_backend``."""

    if settings.store_backend == "memory":
        return InMemoryDocumentStore()
    return FirestoreDocumentStore.from_settings(
        project=settings.firestore_project,
        database=settings.firestore_database,
    )


def init_document_store(settings: Settings | None = None, *, force: bool = False) -> DocumentStore:
    """Create the shared store once; later calls return the same instance."""

    global _store
    if _store is not None and not force:
        return _store
    settings = settings or get_settings()
    _store = build_document_store(settings)
    logger.info("Document store initialised", extra={"backend": settings.store_backend})
    return _store


def get_document_store() -> DocumentStore:
    """FastAPI dependency returning the shared store."""

    if _store is None:
        raise RuntimeError("Document store has not been initialised.")
    return _store


__all__ = [
    "build_document_store",
    "get_document_store",
    "init_document_store",
    "set_document_store",
]
