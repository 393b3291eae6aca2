from __future__ import annotations

import json
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Iterator

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
  id TEXT PRIMARY KEY,
  email TEXT NOT NULL,
  document_json TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_email_created
  ON users(email, created_at);
"""


def _encode(document: dict[str, Any]) -> str:
    return json.dumps(document, sort_keys=True, separators=(",", ":"))


class SQLiteDocumentDB:
    """User documents on SQLite: one JSON document per row, with id and email as lookup columns."""

    def __init__(self, db_path: str) -> None:
        path = Path(db_path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = str(path)
        with self.transaction() as conn:
            conn.executescript(_SCHEMA)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit when the block exits cleanly, roll back otherwise."""
        with closing(sqlite3.connect(self.path, timeout=30.0, check_same_thread=False)) as conn:
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn

    def read(self, *, doc_id: str | None = None, email: str | None = None) -> tuple[str, dict[str, Any]] | None:
        if doc_id is not None:
            sql, params = "SELECT id, document_json FROM users WHERE id = ?", (doc_id,)
        else:
            sql = "SELECT id, document_json FROM users WHERE email = ? ORDER BY created_at ASC, rowid ASC LIMIT 1"
            params = (email,)
        with self.transaction() as conn:
            row = conn.execute(sql, params).fetchone()
        if row is None:
            return None
        return row["id"], json.loads(row["document_json"])

    def insert(self, doc_id: str, email: str, document: dict[str, Any], *, timestamp: str) -> None:
        with self.transaction() as conn:
            conn.execute(
                "INSERT INTO users (id, email, document_json, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                (doc_id, email, _encode(document), timestamp, timestamp),
            )

    def write(self, doc_id: str, email: str, document: dict[str, Any], *, timestamp: str) -> bool:
        """Replace an existing document; False when no row has ``doc_id``."""
        with self.transaction() as conn:
            cursor = conn.execute(
                "UPDATE users SET email = ?, document_json = ?, updated_at = ? WHERE id = ?",
                (email, _encode(document), timestamp, doc_id),
            )
        return cursor.rowcount > 0

