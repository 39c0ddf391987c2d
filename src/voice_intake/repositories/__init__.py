"""Persistence layer built on a hierarchical document store."""

from __future__ import annotations

from .base import Document, DocumentData, DocumentStore, DocumentStoreError, join_path
from .credentials import CredentialRepository
from .memory import InMemoryDocumentStore
from .records import RecordRepository

__all__ = [
    "CredentialRepository",
    "Document",
    "DocumentData",
    "DocumentStore",
    "DocumentStoreError",
    "InMemoryDocumentStore",
    "RecordRepository",
    "join_path",
]
