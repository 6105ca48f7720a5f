from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from benedict.db.database import get_conn
from benedict.models.dictionary import Dictionary

_COLUMNS = "id, name, folder, mdx_filename, css_filename, cover_filename, created_at"


def _row_to_dict(r: sqlite3.Row) -> Dictionary:
    return Dictionary(
        id=r["id"], name=r["name"], folder=r["folder"], mdx_filename=r["mdx_filename"],
        css_filename=r["css_filename"], cover_filename=r["cover_filename"], created_at=r["created_at"]
    )


class DictRepo:
    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path

    def list_dicts(self) -> List[Dictionary]:
        with get_conn(self.db_path) as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM dictionaries ORDER BY name ASC").fetchall()
        return [_row_to_dict(r) for r in rows]

    def get_by_id(self, dict_id: int) -> Optional[Dictionary]:
        with get_conn(self.db_path) as conn:
            r = conn.execute(f"SELECT {_COLUMNS} FROM dictionaries WHERE id = ?", (dict_id,)).fetchone()
        if not r:
            return None
        return _row_to_dict(r)

    def create(self, name: str, folder: str, mdx_filename: str, css_filename: str | None, cover_filename: str | None) -> Dictionary:
        now = datetime.now(timezone.utc).isoformat()
        with get_conn(self.db_path) as conn:
            cur = conn.execute(
                """INSERT INTO dictionaries (name, folder, mdx_filename, css_filename, cover_filename, created_at)
                     VALUES (?, ?, ?, ?, ?, ?)""",
                (name, folder, mdx_filename, css_filename, cover_filename, now),
            )
            dict_id = int(cur.lastrowid)
            r = conn.execute(f"SELECT {_COLUMNS} FROM dictionaries WHERE id = ?", (dict_id,)).fetchone()
        return _row_to_dict(r)

    def delete(self, dict_id: int) -> None:
        with get_conn(self.db_path) as conn:
            conn.execute("DELETE FROM dictionaries WHERE id = ?", (dict_id,))
