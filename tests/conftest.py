"""
Pytest configuration and shared fixtures.
Provides storage engines backed by a temporary SQLite file and by an
in-memory stand-in for a pymongo collection.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from todostore.config import get_settings
from todostore.storage import DocumentEngine, RelationalEngine, SQLiteDialect


class FakeCollection:
    """Dict-backed stand-in for the pymongo collection methods the engine uses."""

    def __init__(self):
        self.docs = {}

    def insert_one(self, doc):
        stored = dict(doc)
        oid = ObjectId()
        stored["_id"] = oid
        self.docs[oid] = stored
        return SimpleNamespace(inserted_id=oid, acknowledged=True)

    def find_one(self, flt):
        doc = self.docs.get(flt["_id"])
        return dict(doc) if doc is not None else None

    def find(self, flt=None):
        return [dict(doc) for doc in self.docs.values()]

    def update_one(self, flt, update):
        doc = self.docs.get(flt["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(update["$set"])
        return SimpleNamespace(matched_count=1, modified_count=1)

    def delete_one(self, flt):
        removed = self.docs.pop(flt["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


def make_mongo_client(collection, existing=()):
    """Build a MagicMock client whose database hands out ``collection``."""
    client = MagicMock()
    db = client.get_database.return_value
    db.list_collection_names.return_value = list(existing)
    db.get_collection.return_value = collection
    return client


@pytest.fixture
def sqlite_path(tmp_path):
    """Path to a fresh SQLite database file."""
    return str(tmp_path / "todos.db")


@pytest.fixture
def sqlite_engine(sqlite_path):
    """RelationalEngine on a temporary SQLite file."""
    return RelationalEngine(SQLiteDialect(sqlite_path))


@pytest.fixture
def mongo_client_factory():
    """The make_mongo_client helper, for tests that need their own client."""
    return make_mongo_client


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def mongo_engine(fake_collection):
    """DocumentEngine on an in-memory collection."""
    client = make_mongo_client(fake_collection)
    return DocumentEngine("mongodb://localhost:27017", "todos_db", "todos", client=client)


@pytest.fixture(params=["sqlite", "mongodb"])
def engine(request):
    """Every engine that can run without a database server."""
    if request.param == "sqlite":
        return request.getfixturevalue("sqlite_engine")
    return request.getfixturevalue("mongo_engine")


@pytest.fixture
def sqlite_env(monkeypatch, sqlite_path):
    """Point the settings at a temporary SQLite file."""
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", sqlite_path)
    get_settings.cache_clear()
    yield sqlite_path
    get_settings.cache_clear()
