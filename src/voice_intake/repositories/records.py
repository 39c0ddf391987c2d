"""Write access for task and note records, including storage routing."""

from __future__ import annotations

from ..models import NoteRecord, Principal, TaskRecord
from .base import DocumentStore, join_path

TASKS_COLLECTION = "tasks"
NOTES_COLLECTION = "notes"


class RecordRepository:
    """Persist intake records under the tenant or the principal's own tree."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        firm_collection: str = "firms",
        user_collection: str = "users",
    ) -> None:
        self._store = store
        self._firm_collection = firm_collection
        self._user_collection = user_collection

    def owner_path(self, principal: Principal) -> str:
        """Return the document that owns the principal's records."""
        if principal.tenant_id:
            return join_path(self._firm_collection, principal.tenant_id)
        return join_path(self._user_collection, principal.user_id)

    def task_path(self, principal: Principal, task_id: str) -> str:
        return f"{self.owner_path(principal)}/{join_path(TASKS_COLLECTION, task_id)}"

    def note_path(self, principal: Principal, note_id: str) -> str:
        return f"{self.owner_path(principal)}/{join_path(NOTES_COLLECTION, note_id)}"

    async def add_task(self, path: str, record: TaskRecord) -> None:
        await self._store.set_document(path, record.to_document())

    async def add_note(self, path: str, record: NoteRecord) -> None:
        await self._store.set_document(path, record.to_document())


__all__ = ["NOTES_COLLECTION", "RecordRepository", "TASKS_COLLECTION"]
