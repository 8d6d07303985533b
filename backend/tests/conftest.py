# backend/tests/conftest.py
import os
import tempfile
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

# configure BEFORE the app (and its settings) is imported
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENV"] = "test"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="investa-logs-")


def _matches(doc: dict, filter: dict) -> bool:
    return all(doc.get(k) == v for k, v in filter.items())


class _Cursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """The slice of Motor's collection API the repositories use"""

    def __init__(self, name: str, unique=()):
        self.name = name
        self.docs: list = []
        self.calls: list = []
        self.unique = set(unique)
        self.fail_with = None

    def _record(self, op: str):
        self.calls.append(op)
        if self.fail_with is not None:
            raise self.fail_with

    async def insert_one(self, document: dict):
        self._record("insert_one")
        for key in self.unique:
            if any(d.get(key) == document.get(key) for d in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error {self.name}.{key}")
        doc = dict(document)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, filter: dict, projection=None):
        self._record("find_one")
        for d in self.docs:
            if _matches(d, filter):
                return dict(d)
        return None

    def find(self, filter: dict):
        self._record("find")
        return _Cursor([dict(d) for d in self.docs if _matches(d, filter)])

    async def create_index(self, keys, unique=False):
        self._record("create_index")
        if unique:
            self.unique.add(keys)
        return keys


class FakeDatabase:
    def __init__(self):
        self.collections = {"users": FakeCollection("users", unique=("email",))}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    @property
    def all_calls(self) -> list:
        return [c for coll in self.collections.values() for c in coll.calls]


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    from fastapi.testclient import TestClient
    from app.api.deps import get_db
    from app.main import app

    async def _override_db():
        return fake_db

    app.dependency_overrides[get_db] = _override_db
    # context manager so lifespan startup/shutdown run
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


SIGNUP = {"name": "A", "email": "a@x.com", "phone": "1", "password": "pw"}


@pytest.fixture
def signup_payload():
    return dict(SIGNUP)


@pytest.fixture
def auth_header(client, signup_payload):
    """Signs up and logs in the default user; returns the Authorization header"""
    assert client.post("/signup", json=signup_payload).status_code == 201
    r = client.post("/login", json={"email": signup_payload["email"], "password": signup_payload["password"]})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}
