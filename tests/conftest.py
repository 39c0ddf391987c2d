from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from voice_intake.core.config import Settings, get_settings
from voice_intake.db.store import get_document_store, set_document_store
from voice_intake.main import create_app
from voice_intake.repositories import InMemoryDocumentStore

FIRM_TOKEN = "tok-firm-member"
SOLO_TOKEN = "tok-independent"
ORPHAN_TOKEN = "tok-without-uid"
LEGACY_FIRM_TOKEN = "legacy-firm-secret"
TOKEN_HEADER = "x-siri-token"


def seed_documents() -> dict[str, dict]:
    return {
        f"siriTokens/{FIRM_TOKEN}": {"uid": "alice"},
        f"siriTokens/{SOLO_TOKEN}": {"uid": "bob"},
        f"siriTokens/{ORPHAN_TOKEN}": {"label": "revoked shortcut"},
        "users/alice": {"displayName": "Alice", "firmId": "acme"},
        "users/bob": {"displayName": "Bob"},
        "firms/acme": {"name": "Acme Accounting", "siriToken": LEGACY_FIRM_TOKEN},
    }


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()
        set_document_store(None)


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test")


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(seed_documents())


@pytest.fixture()
def app(settings: Settings, store: InMemoryDocumentStore) -> Iterator[FastAPI]:
    application = create_app(settings)
    application.dependency_overrides[get_document_store] = lambda: store
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
