from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from benedict.db.database import get_conn
from benedict.service.capabilities import StoreError

class SqliteListStore:
    """Flat key-value store holding lists of strings.

    Each key maps to one row in ``kv_store``; the value is a JSON array.
    sqlite failures and corrupt values surface as StoreError.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path

    def load_list(self, key: str) -> Optional[List[str]]:
        try:
            with get_conn(self.db_path) as conn:
                r = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            if not r:
                return None
            data = json.loads(r["value"])
        except (sqlite3.Error, ValueError) as exc:
            raise StoreError(f"Cannot read kv_store[{key!r}]: {exc}") from exc
        if not isinstance(data, list):
            raise StoreError(f"kv_store[{key!r}] is not a list.")
        return [str(v) for v in data]

    def save_list(self, key: str, values: List[str]) -> None:
        now = datetime.now(timezone.utc).isoformat()
        payload = json.dumps(list(values), ensure_ascii=False)
        try:
            with get_conn(self.db_path) as conn:
                conn.execute(
                    """INSERT INTO kv_store (key, value, updated_at)
                         VALUES (?, ?, ?)
                         ON CONFLICT(key)
                         DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at""",
                    (key, payload, now),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot write kv_store[{key!r}]: {exc}") from exc
