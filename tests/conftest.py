"""Shared pytest fixtures.

The MongoDB server is replaced by a small in-memory double that implements the
handful of async collection methods the services call.
"""

import copy
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from quirknotes.app import App
from quirknotes.config import Config
from quirknotes.core.core import Core
from quirknotes.web.server import create_fastapi_app


@dataclass
class FakeInsertOneResult:
    inserted_id: Any
    acknowledged: bool = True


@dataclass
class FakeUpdateResult:
    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass
class FakeDeleteResult:
    deleted_count: int
    acknowledged: bool = True


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[dict[str, Any]]:
        for doc in self._docs:
            yield doc

    async def to_list(self) -> list[dict[str, Any]]:
        return list(self._docs)


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_keys: list[str] = []

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        if unique:
            self.unique_keys.extend(key for key, _ in keys)
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        doc = next((d for d in self.docs if _matches(d, query)), None)
        return copy.deepcopy(doc)

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def insert_one(self, doc: dict[str, Any]) -> FakeInsertOneResult:
        for key in ["_id", *self.unique_keys]:
            if any(d.get(key) == doc.get(key) for d in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {key}_1")
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertOneResult(inserted_id=doc["_id"])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> FakeUpdateResult:
        for doc in self.docs:
            if _matches(doc, query):
                changes = update.get("$set", {})
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return FakeUpdateResult(matched_count=1, modified_count=int(modified))
        return FakeUpdateResult(matched_count=0, modified_count=0)

    async def delete_one(self, query: dict[str, Any]) -> FakeDeleteResult:
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return FakeDeleteResult(deleted_count=1)
        return FakeDeleteResult(deleted_count=0)


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection(name))


class FakeMongoClient:
    def __init__(self) -> None:
        self._databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        return self._databases.setdefault(name, FakeDatabase(name))

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    """Configuration with a fixed signing secret."""
    return Config(
        database_url="mongodb://localhost:27017/quirknotes_test",
        jwt_secret_key="test-secret-key",
        debug=True,
    )


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
async def core(config, mongo_client) -> AsyncIterator[Core]:
    """Started core backed by the in-memory database."""
    core = Core(config, mongo_client)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
async def app(config, mongo_client) -> AsyncIterator[App]:
    """Started application facade backed by the in-memory database."""
    app = App(config, mongo_client)  # type: ignore[arg-type]
    async with app.lifespan():
        yield app


@pytest.fixture
def client(config, mongo_client) -> Iterator[TestClient]:
    """HTTP client running the full FastAPI app, lifespan included."""
    fastapi_app = create_fastapi_app(App(config, mongo_client), config)  # type: ignore[arg-type]
    with TestClient(fastapi_app) as test_client:
        yield test_client
