"""
tests.test_repository

Behavior of the generic document repository against the in-memory collection.
"""

from __future__ import annotations

import asyncio
import copy

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from sog_api.db.documents import utcnow
from sog_api.db.repositories.blogs import BlogRepo
from sog_api.db.repositories.users import UserRepo
from sog_api.errors import (
    DuplicateKeyError,
    InvalidIdError,
    NotFoundError,
    SerializationError,
    StorageQueryError,
)
from sog_api.schemas.blogs import CreateBlogSchema, UpdateBlogSchema
from sog_api.schemas.users import CreateUserSchema, UpdateUserSchema
from tests.fake_mongo import FakeCollection

MALFORMED_IDS = [
    "",
    "abc",
    "zzzzzzzzzzzzzzzzzzzzzzzz",
    "123456789012",  # 12 chars: valid as raw ObjectId bytes, not as a public id
    "65f1c0ffee65f1c0ffee65f1c",
]


@pytest.mark.asyncio
async def test_create_echoes_fields_with_equal_timestamps(user_repo: UserRepo) -> None:
    before = utcnow()
    user = await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    assert user.name == "alice"
    assert user.uid == "u1"
    assert ObjectId.is_valid(user.id) and len(user.id) == 24
    assert user.created_at == user.updated_at
    assert user.created_at >= before


@pytest.mark.asyncio
async def test_create_ensures_unique_index_then_reads_back(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    assert users_collection.calls == ["create_index", "insert_one", "find_one"]
    assert users_collection.unique_fields == {"name"}
    stored = users_collection.documents[0]
    assert list(stored)[:2] == ["createdAt", "updatedAt"]


@pytest.mark.asyncio
async def test_timestamps_taken_after_index_is_ensured(
    user_repo: UserRepo, users_collection: FakeCollection, monkeypatch: pytest.MonkeyPatch
) -> None:
    events: list[str] = []
    create_index = users_collection.create_index

    async def recording_create_index(keys, unique=False, **kwargs):
        events.append("create_index")
        return await create_index(keys, unique=unique, **kwargs)

    def recording_utcnow():
        events.append("utcnow")
        return utcnow()

    monkeypatch.setattr(users_collection, "create_index", recording_create_index)
    monkeypatch.setattr("sog_api.db.repository.utcnow", recording_utcnow)

    await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    assert events == ["create_index", "utcnow"]


@pytest.mark.asyncio
async def test_create_duplicate_key_rejected_without_insert(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    with pytest.raises(DuplicateKeyError) as excinfo:
        await user_repo.create(CreateUserSchema(name="alice", uid="u2"))

    assert excinfo.value.field == "name"
    assert excinfo.value.value == "alice"
    assert await users_collection.count_documents({}) == 1


@pytest.mark.asyncio
async def test_concurrent_creates_with_same_key_have_one_winner(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    results = await asyncio.gather(
        *(user_repo.create(CreateUserSchema(name="alice", uid=f"u{i}")) for i in range(5)),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, BaseException)]
    assert len(results) - len(errors) == 1
    assert len(errors) == 4
    assert all(isinstance(e, DuplicateKeyError) for e in errors)
    assert await users_collection.count_documents({"name": "alice"}) == 1


@pytest.mark.asyncio
async def test_index_failure_aborts_before_insert(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    users_collection.fail("create_index", ServerSelectionTimeoutError("no servers"))

    with pytest.raises(StorageQueryError) as excinfo:
        await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    assert excinfo.value.operation == "create_index"
    assert "insert_one" not in users_collection.calls
    assert users_collection.documents == []


@pytest.mark.asyncio
async def test_insert_transport_failure_is_storage_query_error(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    users_collection.fail("insert_one", AutoReconnect("connection reset"))

    with pytest.raises(StorageQueryError):
        await user_repo.create(CreateUserSchema(name="alice", uid="u1"))


@pytest.mark.asyncio
async def test_missing_readback_is_not_found(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    users_collection.drop_inserts = True

    with pytest.raises(NotFoundError):
        await user_repo.create(CreateUserSchema(name="alice", uid="u1"))


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", MALFORMED_IDS)
async def test_malformed_id_rejected_before_store_access(
    user_repo: UserRepo, users_collection: FakeCollection, bad_id: str
) -> None:
    with pytest.raises(InvalidIdError):
        await user_repo.get(bad_id)
    with pytest.raises(InvalidIdError):
        await user_repo.update(bad_id, UpdateUserSchema(uid="u9"))
    with pytest.raises(InvalidIdError):
        await user_repo.delete(bad_id)

    assert users_collection.calls == []


@pytest.mark.asyncio
async def test_well_formed_missing_id_is_not_found(user_repo: UserRepo) -> None:
    missing = str(ObjectId())

    with pytest.raises(NotFoundError):
        await user_repo.get(missing)
    with pytest.raises(NotFoundError):
        await user_repo.update(missing, UpdateUserSchema(uid="u9"))
    with pytest.raises(NotFoundError):
        await user_repo.delete(missing)


@pytest.mark.asyncio
async def test_get_transport_failure_is_storage_query_error(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    users_collection.fail("find_one", AutoReconnect("connection reset"))

    with pytest.raises(StorageQueryError):
        await user_repo.get(str(ObjectId()))


@pytest.mark.asyncio
async def test_delete_twice(user_repo: UserRepo) -> None:
    user = await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    await user_repo.delete(user.id)
    with pytest.raises(NotFoundError):
        await user_repo.delete(user.id)


@pytest.mark.asyncio
async def test_pages_are_disjoint_and_cover_collection(user_repo: UserRepo) -> None:
    for i in range(3):
        await user_repo.create(CreateUserSchema(name=f"user-{i}", uid=f"u{i}"))

    first = await user_repo.list(limit=2, page=1)
    second = await user_repo.list(limit=2, page=2)

    assert first.results == 2
    assert second.results == 1
    ids = [u.id for u in first.items] + [u.id for u in second.items]
    assert len(set(ids)) == 3


@pytest.mark.asyncio
async def test_page_past_end_is_empty(user_repo: UserRepo) -> None:
    await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    result = await user_repo.list(limit=10, page=2)

    assert result.items == []
    assert result.results == 0


@pytest.mark.asyncio
async def test_list_failure_is_storage_query_error(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    users_collection.fail("find", AutoReconnect("connection reset"))

    with pytest.raises(StorageQueryError):
        await user_repo.list(limit=10, page=1)


@pytest.mark.asyncio
async def test_partial_update_changes_only_named_field(blog_repo: BlogRepo) -> None:
    blog = await blog_repo.create(
        CreateBlogSchema(title="First", summary="s", content="c", category="news")
    )

    updated = await blog_repo.update(blog.id, UpdateBlogSchema(published=True))
    refetched = await blog_repo.get(blog.id)

    assert updated == refetched
    assert refetched.published is True
    assert (refetched.title, refetched.summary, refetched.content, refetched.category) == (
        "First",
        "s",
        "c",
        "news",
    )
    assert refetched.created_at == blog.created_at
    assert refetched.updated_at >= blog.updated_at


@pytest.mark.asyncio
async def test_update_with_no_fields_only_refreshes_updated_at(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    user = await user_repo.create(CreateUserSchema(name="alice", uid="u1"))

    updated = await user_repo.update(user.id, UpdateUserSchema())

    assert (updated.name, updated.uid) == ("alice", "u1")
    assert set(users_collection.documents[0]) == {"_id", "createdAt", "updatedAt", "name", "uid"}


@pytest.mark.asyncio
async def test_update_to_taken_key_is_duplicate(user_repo: UserRepo) -> None:
    await user_repo.create(CreateUserSchema(name="alice", uid="u1"))
    bob = await user_repo.create(CreateUserSchema(name="bob", uid="u2"))

    with pytest.raises(DuplicateKeyError):
        await user_repo.update(bob.id, UpdateUserSchema(name="alice"))

    assert (await user_repo.get(bob.id)).name == "bob"


@pytest.mark.asyncio
@pytest.mark.filterwarnings("ignore::UserWarning")
async def test_unencodable_patch_is_serialization_error(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    user = await user_repo.create(CreateUserSchema(name="alice", uid="u1"))
    before = copy.deepcopy(users_collection.documents)
    # Bypasses validation; pydantic passes the unknown object through, BSON cannot encode it.
    body = UpdateUserSchema.model_construct(_fields_set={"uid"}, uid=object())

    with pytest.raises(SerializationError) as excinfo:
        await user_repo.update(user.id, body)

    assert isinstance(excinfo.value.__cause__, InvalidDocument)
    assert users_collection.documents == before


@pytest.mark.asyncio
async def test_blog_defaults_are_written_as_concrete_fields(
    blog_repo: BlogRepo, blogs_collection: FakeCollection
) -> None:
    blog = await blog_repo.create(CreateBlogSchema(title="Hello", summary="s", content="c"))

    assert blog.published is False
    assert blog.category == ""
    stored = blogs_collection.documents[0]
    assert stored["published"] is False
    assert stored["category"] == ""
    assert blogs_collection.unique_fields == {"title"}


@pytest.mark.asyncio
async def test_blog_explicit_values_override_defaults(blog_repo: BlogRepo) -> None:
    blog = await blog_repo.create(
        CreateBlogSchema(title="Hello", summary="s", content="c", category="rust", published=True)
    )

    assert blog.published is True
    assert blog.category == "rust"


@pytest.mark.asyncio
async def test_stored_document_not_matching_schema_is_serialization_error(
    user_repo: UserRepo, users_collection: FakeCollection
) -> None:
    oid = ObjectId()
    users_collection.documents.append({"_id": oid, "name": "legacy"})

    with pytest.raises(SerializationError):
        await user_repo.get(str(oid))


@pytest.mark.asyncio
async def test_user_lifecycle(user_repo: UserRepo) -> None:
    alice = await user_repo.create(CreateUserSchema(name="alice", uid="u1"))
    assert alice.created_at == alice.updated_at

    with pytest.raises(DuplicateKeyError):
        await user_repo.create(CreateUserSchema(name="alice", uid="u2"))

    assert await user_repo.get(alice.id) == alice

    await user_repo.delete(alice.id)
    with pytest.raises(NotFoundError):
        await user_repo.get(alice.id)
