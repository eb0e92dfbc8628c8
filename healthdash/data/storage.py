from __future__ import annotations

"""SQLite storage: raw key-value settings, JSON settings and the todo list."""

import json
import re
import sqlite3
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator


SCHEMA_VERSION = 1
MAX_TODO_LENGTH = 200

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_JS_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)
_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)


@dataclass(frozen=True)
class TodoRow:
    id: str
    text: str
    completed: bool
    sort_order: int
    created_at: int


def sanitize_text(text: str) -> str:
    """Strip markup and script-like fragments from user input."""
    cleaned = _SCRIPT_RE.sub("", text)
    cleaned = _TAG_RE.sub("", cleaned)
    cleaned = _JS_SCHEME_RE.sub("", cleaned)
    cleaned = _HANDLER_RE.sub("", cleaned)
    return cleaned.replace("\0", "").strip()


class Storage:
    """Wraps the SQLite file; every public call opens its own connection."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos(
                    id TEXT PRIMARY KEY,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    sort_order INTEGER NOT NULL DEFAULT 0,
                    created_at INTEGER NOT NULL
                )
                """
            )

    # Raw key-value access, used by the timer store

    def get(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM settings WHERE key = ?", (key,))

    def get_setting(self, key: str, default: Any = None) -> Any:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value))

    def list_todos(self) -> list[TodoRow]:
        """Todos in manual order, oldest first within the same slot."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, text, completed, sort_order, created_at FROM todos ORDER BY sort_order ASC, created_at ASC"
            ).fetchall()
        finally:
            conn.close()
        return [
            TodoRow(
                id=row["id"],
                text=row["text"],
                completed=bool(row["completed"]),
                sort_order=row["sort_order"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def create_todo(self, text: str) -> str:
        clean_text = sanitize_text(text)
        if not clean_text:
            raise ValueError("Todo text cannot be empty")
        if len(clean_text) > MAX_TODO_LENGTH:
            raise ValueError(f"Todo text is limited to {MAX_TODO_LENGTH} characters")
        todo_id = uuid.uuid4().hex
        with self._transaction() as conn:
            next_order_row = conn.execute("SELECT COALESCE(MAX(sort_order), -1) + 1 AS next_order FROM todos").fetchone()
            conn.execute(
                "INSERT INTO todos(id, text, completed, sort_order, created_at) VALUES (?, ?, 0, ?, ?)",
                (todo_id, clean_text, int(next_order_row["next_order"]), int(time.time() * 1000)),
            )
        return todo_id

    def set_todo_completed(self, todo_id: str, completed: bool) -> None:
        with self._transaction() as conn:
            conn.execute("UPDATE todos SET completed = ? WHERE id = ?", (int(completed), todo_id))

    def delete_todo(self, todo_id: str) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))

    def clear_completed_todos(self) -> int:
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM todos WHERE completed = 1")
            return int(cursor.rowcount)
