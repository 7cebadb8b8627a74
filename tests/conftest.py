# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

import main


class FakeRef:
    """In-memory stand-in for a firebase_admin.db.Reference."""

    def __init__(self, store, path=()):
        self._store = store
        self._path = path

    def child(self, key):
        return FakeRef(self._store, self._path + (key,))

    def get(self):
        node = self._store
        for key in self._path:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def set(self, value):
        node = self._store
        for key in self._path[:-1]:
            node = node.setdefault(key, {})
        node[self._path[-1]] = value


@pytest.fixture
def store():
    return {"coupons": {}}


@pytest.fixture
def db_ref(store):
    return FakeRef(store)


@pytest.fixture
def client(monkeypatch, db_ref):
    monkeypatch.setattr(main, "get_db_ref", lambda: db_ref)
    monkeypatch.setattr(main, "ADMIN_KEY", "secret")
    return TestClient(main.app)
