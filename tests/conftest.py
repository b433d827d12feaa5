"""
Restaurant API - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests must not need a running MongoDB.
How:   An in-memory collection double stands in for the driver's
       AsyncCollection behind a store double that counts connections
       opened and closed, and the app's get_store dependency is overridden
       to return it.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_collection: In-memory collection with Mongo-like results
    ├── fake_store: Store double yielding fake_collection per request
    ├── failing_store: Store double whose connection always fails
    ├── sample_restaurant: Valid create body
    └── test_client: HTTPX AsyncClient wired to a fresh app
"""

import os
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, Dict, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

# Keep test output quiet and never point at a real store by accident
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["MONGODB_URI"] = "mongodb://127.0.0.1:1/restaurant-api-test"

from restaurant_api.database import get_store  # noqa: E402
from restaurant_api.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Store Doubles
# ══════════════════════════════════════════════════════════════════════════


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return [dict(d) for d in self._documents]


class FakeCollection:
    """
    Dict-backed collection supporting the calls RestaurantService makes.

    Result objects expose the same attribute names as pymongo's
    InsertOneResult / UpdateResult / DeleteResult.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls = 0

    def find(self, filter=None):
        self.calls += 1
        return FakeCursor(list(self.documents.values()))

    async def find_one(self, filter, projection=None):
        self.calls += 1
        doc = self.documents.get(filter["_id"])
        return dict(doc) if doc is not None else None

    async def insert_one(self, document):
        self.calls += 1
        oid = ObjectId()
        document["_id"] = oid
        self.documents[oid] = dict(document)
        return SimpleNamespace(inserted_id=oid, acknowledged=True)

    async def update_one(self, filter, update):
        self.calls += 1
        doc = self.documents.get(filter["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        changes = {k: v for k, v in update["$set"].items() if doc.get(k) != v}
        doc.update(changes)
        return SimpleNamespace(matched_count=1, modified_count=1 if changes else 0)

    async def delete_one(self, filter):
        self.calls += 1
        removed = self.documents.pop(filter["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


class FakeStore:
    """
    Stand-in for RestaurantStore.

    Counts connections so tests can assert that every opened connection is
    closed, and that rejected requests never open one.
    """

    def __init__(self, collection: Any = None, error: Optional[Exception] = None):
        self._collection = collection if collection is not None else FakeCollection()
        self.error = error
        self.opened = 0
        self.closed = 0
        self.collection_name = "restaurants"

    @asynccontextmanager
    async def collection(self):
        self.opened += 1
        try:
            if self.error is not None:
                raise self.error
            yield self._collection
        finally:
            self.closed += 1

    async def ping(self):
        async with self.collection():
            pass


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def store_factory():
    """The FakeStore class, for tests that build their own collection double."""
    return FakeStore


@pytest.fixture
def fake_store(fake_collection):
    return FakeStore(collection=fake_collection)


@pytest.fixture
def failing_store():
    """A store whose every connection attempt times out."""
    return FakeStore(error=ServerSelectionTimeoutError("No servers found"))


@pytest.fixture
def sample_restaurant():
    return {
        "name": "Pizza Place",
        "image": "http://x/img.png",
        "menu": ["margherita"],
        "rating": 4.5,
    }


def _client_for(store):
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to a fresh app backed by fake_store.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/restaurants")
            assert response.status_code == 200
    """
    async with _client_for(fake_store) as client:
        yield client


@pytest_asyncio.fixture
async def failing_client(failing_store):
    """Client whose store is unreachable, for 500-path tests."""
    async with _client_for(failing_store) as client:
        yield client
