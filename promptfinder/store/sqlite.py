# SQLite-backed RecordStore.
#
# Schema:
#   prompts(id TEXT PRIMARY KEY, title, description, text, category,
#           tags_json TEXT, is_private INTEGER, user_id TEXT)
#
# Every call opens its own short-lived connection, so the public and private
# reads of one request can run on different threads.

from __future__ import annotations

import json
import os
import sqlite3
from typing import Any, Dict, Iterable, List

from ..search.types import RecordFilter

_SCHEMA = """
CREATE TABLE IF NOT EXISTS prompts (
    id          TEXT PRIMARY KEY,
    title       TEXT,
    description TEXT,
    text        TEXT,
    category    TEXT,
    tags_json   TEXT,
    is_private  INTEGER NOT NULL DEFAULT 0,
    user_id     TEXT
);

CREATE INDEX IF NOT EXISTS idx_prompts_visibility ON prompts(is_private, user_id);
"""

_COLUMNS = "id, title, description, text, category, tags_json, is_private, user_id"


def _decode_tags(raw: Any) -> Any:
    if raw is None:
        return []
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        # left for the projector to coerce
        return raw


class SqliteRecordStore:
    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=self.timeout)

    def init_schema(self) -> None:
        """Create the prompts table (and parent directory) if missing."""
        parent = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(parent, exist_ok=True)
        conn = self._connect()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        finally:
            conn.close()

    def upsert_records(self, records: Iterable[Dict[str, Any]]) -> int:
        rows = []
        for r in records:
            tags = r.get("tags") or []
            rows.append((
                str(r["id"]),
                r.get("title"),
                r.get("description"),
                r.get("text", r.get("body")),
                r.get("category"),
                json.dumps(list(tags) if isinstance(tags, (list, tuple)) else []),
                1 if r.get("isPrivate") else 0,
                r.get("userId"),
            ))
        conn = self._connect()
        try:
            conn.executemany(
                f"INSERT OR REPLACE INTO prompts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                rows,
            )
            conn.commit()
        finally:
            conn.close()
        return len(rows)

    def count(self) -> int:
        conn = self._connect()
        try:
            return conn.execute("SELECT count(*) FROM prompts").fetchone()[0]
        finally:
            conn.close()

    def fetch(self, record_filter: RecordFilter, cap: int) -> List[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM prompts WHERE is_private = ?"
        params: List[Any] = [1 if record_filter.is_private else 0]
        if record_filter.owner_id is not None:
            sql += " AND user_id = ?"
            params.append(record_filter.owner_id)
        sql += " ORDER BY rowid LIMIT ?"
        params.append(int(cap))

        conn = self._connect()
        try:
            rows = conn.execute(sql, params).fetchall()
        finally:
            conn.close()

        return [
            {
                "id": row[0],
                "title": row[1],
                "description": row[2],
                "text": row[3],
                "category": row[4],
                "tags": _decode_tags(row[5]),
                "isPrivate": bool(row[6]),
                "userId": row[7],
            }
            for row in rows
        ]
