"""Shared fixtures: an in-memory stand-in for the async MongoDB handle."""
import copy
from types import SimpleNamespace

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api.main import create_app
from core.database import Connection, get_database
from patterns.domain_config import BookstoreConfig, SeedMode


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


def _matches(doc, filters):
    return all(doc.get(key) == value for key, value in (filters or {}).items())


class FakeCollection:
    """Implements the subset of AsyncCollection the repositories call.

    Inserted documents are BSON-encoded like the driver does, so values
    MongoDB cannot store fail here too.
    """

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.error = None  # exception raised by every operation when set
        self.insert_many_calls = []

    def _check(self):
        if self.error is not None:
            raise self.error

    def find(self, filters=None):
        self._check()
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, filters)])

    async def find_one(self, filters=None):
        self._check()
        for doc in self.docs:
            if _matches(doc, filters):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc):
        self._check()
        doc.setdefault("_id", ObjectId())
        bson.encode(doc)
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs, ordered=True):
        self._check()
        self.insert_many_calls.append({"count": len(docs), "ordered": ordered})
        ids = []
        for doc in docs:
            doc.setdefault("_id", ObjectId())
            bson.encode(doc)
            self.docs.append(copy.deepcopy(doc))
            ids.append(doc["_id"])
        return SimpleNamespace(inserted_ids=ids)

    async def count_documents(self, filters):
        self._check()
        return sum(1 for d in self.docs if _matches(d, filters))


class FakeDatabase:
    name = "bookstore"

    def __init__(self):
        self.collections = {}
        self.ping_error = None

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection(name))

    async def command(self, name):
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}


class FakeClient:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    """TestClient without lifespan; the fake is injected via get_database."""
    app = create_app(BookstoreConfig(seed_mode=SeedMode.OFF))
    app.dependency_overrides[get_database] = lambda: fake_db
    return TestClient(app)


@pytest.fixture
def make_started_client(monkeypatch, fake_db):
    """Build a TestClient whose lifespan connects to ``fake_db``.

    Use as a context manager so startup (connect → seed) runs::

        with make_started_client(SeedMode.ALWAYS) as c:
            ...
    """
    fake_client = FakeClient()

    async def fake_connect(config):
        try:
            await fake_db.command("ping")
        except Exception as exc:
            return Connection(client=fake_client, database=fake_db, error=str(exc))
        return Connection(client=fake_client, database=fake_db, verified=True)

    monkeypatch.setattr("api.main.connect_db", fake_connect)

    def factory(seed_mode=SeedMode.IF_EMPTY):
        return TestClient(create_app(BookstoreConfig(seed_mode=seed_mode)))

    factory.fake_client = fake_client
    return factory
