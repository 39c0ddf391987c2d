from __future__ import annotations

import pytest

from conftest import FIRM_TOKEN, LEGACY_FIRM_TOKEN, ORPHAN_TOKEN, SOLO_TOKEN
from voice_intake.errors import InvalidCredentialError, MissingCredentialError
from voice_intake.models import Principal
from voice_intake.repositories import CredentialRepository, InMemoryDocumentStore
from voice_intake.services import CredentialResolver

pytestmark = pytest.mark.asyncio


def _resolver(store: InMemoryDocumentStore, **kwargs) -> CredentialResolver:
    return CredentialResolver(CredentialRepository(store), **kwargs)


async def test_firm_member_token_resolves_tenant(store: InMemoryDocumentStore) -> None:
    principal = await _resolver(store).resolve(FIRM_TOKEN)

    assert principal == Principal(user_id="alice", tenant_id="acme")
    assert principal.is_independent is False
    assert store.reads == 2
    assert store.writes == 0


async def test_independent_token_has_no_tenant(store: InMemoryDocumentStore) -> None:
    principal = await _resolver(store).resolve(SOLO_TOKEN)

    assert principal == Principal(user_id="bob", tenant_id=None)
    assert principal.is_independent is True


async def test_missing_profile_is_treated_as_independent() -> None:
    store = InMemoryDocumentStore({"siriTokens/t1": {"uid": "carol"}})

    principal = await _resolver(store).resolve("t1")

    assert principal == Principal(user_id="carol")


async def test_tenant_comes_from_profile_not_credential() -> None:
    store = InMemoryDocumentStore(
        {
            "siriTokens/t2": {"uid": "dana", "firmId": "stale-firm"},
            "users/dana": {"firmId": "acme"},
        }
    )

    principal = await _resolver(store).resolve("t2")

    assert principal == Principal(user_id="dana", tenant_id="acme")


@pytest.mark.parametrize("token", [None, "", "   "])
async def test_absent_token_is_missing_credential(store: InMemoryDocumentStore, token: str | None) -> None:
    with pytest.raises(MissingCredentialError) as excinfo:
        await _resolver(store).resolve(token)

    assert excinfo.value.status_code == 401
    assert store.reads == 0


async def test_unknown_token_is_invalid(store: InMemoryDocumentStore) -> None:
    with pytest.raises(InvalidCredentialError) as excinfo:
        await _resolver(store).resolve("not-a-real-token")

    assert excinfo.value.status_code == 401
    assert store.reads == 1


async def test_token_record_without_principal_is_invalid(store: InMemoryDocumentStore) -> None:
    with pytest.raises(InvalidCredentialError):
        await _resolver(store).resolve(ORPHAN_TOKEN)


@pytest.mark.parametrize("token", ["users/alice", ".", "..", "__name__", "x" * 1501, "\u00e9" * 751])
async def test_token_that_cannot_be_a_document_id_never_reaches_store(
    store: InMemoryDocumentStore, token: str
) -> None:
    with pytest.raises(InvalidCredentialError):
        await _resolver(store).resolve(token)

    assert store.reads == 0


async def test_longest_allowed_token_is_looked_up(store: InMemoryDocumentStore) -> None:
    with pytest.raises(InvalidCredentialError):
        await _resolver(store).resolve("x" * 1500)

    assert store.reads == 1


async def test_firm_model_resolves_tenant_by_equality_query(store: InMemoryDocumentStore) -> None:
    resolver = _resolver(store, model="firm", firm_actor_id="siri")

    principal = await resolver.resolve(LEGACY_FIRM_TOKEN)

    assert principal == Principal(user_id="siri", tenant_id="acme")
    assert store.reads == 1


async def test_firm_model_rejects_unknown_token_as_forbidden(store: InMemoryDocumentStore) -> None:
    resolver = _resolver(store, model="firm")

    with pytest.raises(InvalidCredentialError) as excinfo:
        await resolver.resolve(FIRM_TOKEN)

    assert excinfo.value.status_code == 403
