from __future__ import annotations

import json

import pytest

from benedict.data.kv_store import SqliteListStore
from benedict.db.database import get_conn
from benedict.service.capabilities import StoreError


def test_absent_key_loads_none(sqlite_store):
    assert sqlite_store.load_list("history") is None


def test_save_then_load_preserves_order(sqlite_store):
    sqlite_store.save_list("history", ["狗", "cat", "dog"])
    assert sqlite_store.load_list("history") == ["狗", "cat", "dog"]


def test_save_overwrites(sqlite_store):
    sqlite_store.save_list("favorites", ["a", "b"])
    sqlite_store.save_list("favorites", ["c"])
    assert sqlite_store.load_list("favorites") == ["c"]


def test_keys_are_independent(sqlite_store):
    sqlite_store.save_list("history", ["a"])
    sqlite_store.save_list("favorites", ["b"])
    assert sqlite_store.load_list("history") == ["a"]
    assert sqlite_store.load_list("favorites") == ["b"]


def test_value_is_stored_as_json_array(sqlite_store, db_path):
    sqlite_store.save_list("history", ["猫"])
    with get_conn(db_path) as conn:
        raw = conn.execute("SELECT value FROM kv_store WHERE key = 'history'").fetchone()["value"]
    assert json.loads(raw) == ["猫"]
    assert "猫" in raw


def test_non_list_value_is_rejected(sqlite_store, db_path):
    with get_conn(db_path) as conn:
        conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES ('history', '{\"a\": 1}', 'now')"
        )
    with pytest.raises(StoreError):
        sqlite_store.load_list("history")


def test_corrupt_json_is_a_store_error(sqlite_store, db_path):
    with get_conn(db_path) as conn:
        conn.execute("INSERT INTO kv_store (key, value, updated_at) VALUES ('history', '[not json', 'now')")
    with pytest.raises(StoreError):
        sqlite_store.load_list("history")


def test_missing_table_is_a_store_error(tmp_path):
    store = SqliteListStore(tmp_path / "empty.db")
    with pytest.raises(StoreError):
        store.load_list("history")
    with pytest.raises(StoreError):
        store.save_list("history", ["cat"])
