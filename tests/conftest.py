"""Shared fixtures: a throwaway sqlite database and an in-memory dictionary."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from benedict.data.kv_store import SqliteListStore
from benedict.db.database import init_db
from benedict.main import create_app
from benedict.service.lookup_state import LookupStateManager
from tests.fakes import FakeDictionary, MemoryStore


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "benedict.db"
    init_db(path, tmp_path / "dictionaries")
    return path


@pytest.fixture
def dictionary():
    return FakeDictionary({"猫", "狗", "cat", "dog", "serendipity"})


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def manager(dictionary, store):
    return LookupStateManager(dictionary, store)


@pytest.fixture
def sqlite_store(db_path):
    return SqliteListStore(db_path)


@pytest.fixture
def client(tmp_path, dictionary):
    app = create_app(
        dictionary_checker=dictionary,
        renderer=dictionary,
        db_path=tmp_path / "web.db",
        dict_root=tmp_path / "dictionaries",
    )
    with TestClient(app) as c:
        yield c
