"""Document store lifecycle helpers."""

from __future__ import annotations

from .store import get_document_store, init_document_store, set_document_store

__all__ = ["get_document_store", "init_document_store", "set_document_store"]
