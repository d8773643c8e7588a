from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from app.core.exceptions import DatabaseError, EmailAlreadyRegisteredError
from app.domain.models.user import UserModel
from app.domain.repositories.user_repository import UserRepository

pytestmark = pytest.mark.anyio


class RecordingCollection:
    """Minimal async collection recording the queries it receives."""

    def __init__(self):
        self.documents = {}
        self.calls = []
        self.raise_on_insert = None
        self.raise_on_update = None

    async def insert_one(self, document):
        self.calls.append(("insert_one", document))
        if self.raise_on_insert:
            raise self.raise_on_insert
        inserted_id = ObjectId()
        self.documents[inserted_id] = {**document, "_id": inserted_id}
        return SimpleNamespace(inserted_id=inserted_id)

    async def find_one(self, query):
        self.calls.append(("find_one", query))
        for document in self.documents.values():
            if all(document.get(key) == value for key, value in query.items()):
                return dict(document)
        return None

    async def update_one(self, query, update):
        self.calls.append(("update_one", query, update))
        if self.raise_on_update:
            raise self.raise_on_update
        matched = await self.find_one(query)
        return SimpleNamespace(matched_count=1 if matched else 0)


@pytest.fixture
def collection() -> RecordingCollection:
    return RecordingCollection()


@pytest.fixture
def repository(collection) -> UserRepository:
    return UserRepository(collection=collection)


async def test_create_user_returns_model_with_string_id(repository, collection):
    created = await repository.create_user(UserModel(email="a@example.com", first_name="A"))

    assert ObjectId.is_valid(created.id)
    inserted = collection.calls[0][1]
    assert inserted["firstName"] == "A"
    assert inserted["role"] == "user"
    assert "createdAt" in inserted and "updatedAt" in inserted


async def test_create_user_duplicate_email(repository, collection):
    collection.raise_on_insert = DuplicateKeyError("E11000 duplicate key error")

    with pytest.raises(EmailAlreadyRegisteredError):
        await repository.create_user(UserModel(email="a@example.com"))



async def test_create_user_write_failure_raises_database_error(repository, collection):
    collection.raise_on_insert = ServerSelectionTimeoutError("no primary available")

    with pytest.raises(DatabaseError) as exc_info:
        await repository.create_user(UserModel(email="a@example.com"))

    assert exc_info.value.details == {"reason": "no primary available"}


async def test_update_user_write_failure_raises_database_error(repository, collection):
    created = await repository.create_user(UserModel(email="a@example.com"))
    collection.raise_on_update = ServerSelectionTimeoutError("no primary available")

    with pytest.raises(DatabaseError):
        await repository.update_user(created.id, {"bio": "Hi"})

async def test_get_user_by_id_with_malformed_id_skips_query(repository, collection):
    assert await repository.get_user_by_id("not-an-object-id") is None
    assert collection.calls == []


async def test_update_user_builds_set_and_unset(repository, collection):
    created = await repository.create_user(UserModel(email="a@example.com"))

    matched = await repository.update_user(
        created.id, {"socials.github": "https://github.com/a"}, ["bio"]
    )

    assert matched is True
    _, query, update = collection.calls[-2]
    assert query == {"_id": ObjectId(created.id)}
    assert update["$set"]["socials.github"] == "https://github.com/a"
    assert "updatedAt" in update["$set"]
    assert update["$unset"] == {"bio": ""}
