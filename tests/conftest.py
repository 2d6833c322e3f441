import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_ACCESS_SECRET_KEY", "test-secret")

from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.db import get_complaints_collection
from app.core.security import create_access_token
from main import app


class InMemoryCollection:
    """Async stand-in for the complaints collection used by the handlers."""

    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}
        self.writes: list[tuple[str, dict]] = []

    def insert(self, **fields) -> ObjectId:
        oid = ObjectId()
        self.docs[oid] = {"_id": oid, **fields}
        return oid

    async def update_one(self, flt, update):
        self.writes.append(("update_one", flt))
        doc = self.docs.get(flt["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(update["$set"])
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, flt):
        self.writes.append(("delete_one", flt))
        removed = self.docs.pop(flt["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_complaints_collection] = lambda: collection
    # Unhandled errors are asserted as 500 responses.
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def bearer(user_id: str = "admin-1", role: str = "admin") -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def admin_headers():
    return bearer()


@pytest.fixture
def user_headers():
    return bearer("user-7", "user")
