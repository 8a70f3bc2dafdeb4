"""Database helpers for the users store."""
from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import List, Mapping, Sequence

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER NOT NULL,
    address TEXT,
    additional_info TEXT,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

SCHEMA_MIGRATIONS = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    name TEXT PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

MIGRATIONS: tuple[tuple[str, str], ...] = (
    (
        "001_create_users_age_index",
        """
        CREATE INDEX IF NOT EXISTS idx_users_age
            ON users(age);
        """,
    ),
)

INSERT_USER = """
INSERT INTO users (name, age, address, additional_info)
VALUES (:name, :age, :address, :additional_info)
"""


def get_connection(db_path: Path | str) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    path = Path(db_path)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path | str) -> None:
    """Initialise the SQLite database with the required tables."""
    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA)
        run_migrations(conn)
        conn.commit()
    finally:
        conn.close()


def run_migrations(conn: sqlite3.Connection) -> None:
    """Apply outstanding migrations to the database."""

    conn.executescript(SCHEMA_MIGRATIONS)
    for name, script in MIGRATIONS:
        row = conn.execute(
            "SELECT 1 FROM schema_migrations WHERE name = ?", (name,)
        ).fetchone()
        if row:
            continue
        conn.executescript(script)
        conn.execute(
            "INSERT INTO schema_migrations (name) VALUES (?)",
            (name,),
        )
    conn.commit()


class SQLiteSink:
    """Bulk-insert sink writing one batch per transaction."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, rows: Sequence[Mapping[str, object]]) -> int:
        try:
            cursor = self._conn.executemany(INSERT_USER, list(rows))
        except Exception:
            self._conn.rollback()
            raise
        self._conn.commit()
        return cursor.rowcount


def _decode_json(value: str | None) -> object:
    if value is None:
        return None
    return json.loads(value)


def fetch_users(conn: sqlite3.Connection, *, limit: int = 100) -> List[dict]:
    """Return stored users ordered by id with JSON columns decoded."""
    rows = conn.execute(
        "SELECT id, name, age, address, additional_info, created_at "
        "FROM users ORDER BY id LIMIT ?",
        (limit,),
    ).fetchall()
    return [
        {
            "id": int(row["id"]),
            "name": row["name"],
            "age": int(row["age"]),
            "address": _decode_json(row["address"]),
            "additional_info": _decode_json(row["additional_info"]),
            "created_at": row["created_at"],
        }
        for row in rows
    ]


def fetch_ages(conn: sqlite3.Connection) -> List[int]:
    rows = conn.execute("SELECT age FROM users ORDER BY age").fetchall()
    return [int(row["age"]) for row in rows]


def count_users(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT COUNT(*) AS count FROM users").fetchone()
    return int(row["count"] if row else 0)


def delete_users(conn: sqlite3.Connection) -> int:
    """Delete every stored user and return how many were removed."""
    cursor = conn.execute("DELETE FROM users")
    conn.commit()
    return cursor.rowcount
