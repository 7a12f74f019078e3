"""
Database connections and a simple migration system.

This module provides functions for obtaining database connections for
the two durable stores, SQLite (``get_sqlite_connection``) and
PostgreSQL (``get_postgres_connection``), and for applying migrations
when the store is initialised.

Applied migration versions are recorded in the ``schema_migrations``
table and new migrations are executed in order.  Each dialect keeps
its own list because column types and defaults differ.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

import psycopg2
import psycopg2.extras

from .config import Settings, settings

logger = logging.getLogger(__name__)


SQLITE_MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: ideas table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS ideas (
            id TEXT PRIMARY KEY,
            text TEXT NOT NULL CHECK (length(text) <= 280),
            upvotes INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: index matching the list ordering
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_ideas_ranking ON ideas(upvotes DESC, created_at DESC);
        """,
    ),
]


POSTGRES_MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: ideas table.  gen_random_uuid() is built in from PostgreSQL 13.
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS ideas (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            text VARCHAR(280) NOT NULL CHECK (length(text) <= 280),
            upvotes INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_ideas_ranking ON ideas(upvotes DESC, created_at DESC);
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute (or the special ``:memory:``
    name), use it directly.  Otherwise resolve it relative to the
    project root.
    """
    db_url = database_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_sqlite_connection(database_url: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  No
    type detection is enabled; timestamps are stored and returned as
    ISO‑8601 strings and parsed by the store.
    """
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    return conn


def get_postgres_connection(config: Optional[Settings] = None) -> Any:
    """Open a new PostgreSQL connection using the ``DB_*`` settings.

    Rows are returned as dictionaries (``RealDictCursor``) so the store
    can read columns by name, as with ``sqlite3.Row``.
    """
    config = config or settings
    return psycopg2.connect(
        host=config.db_host,
        port=config.db_port,
        user=config.db_user,
        password=config.db_password,
        dbname=config.db_name,
        cursor_factory=psycopg2.extras.RealDictCursor,
    )


@contextmanager
def get_cursor(conn: Any) -> Iterator[Any]:
    """Yield a cursor, commit on success and always close the connection."""
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _current_version(cursor: Any) -> int:
    cursor.execute("SELECT MAX(version) AS version FROM schema_migrations")
    row = cursor.fetchone()
    return row["version"] if row and row["version"] is not None else 0


def init_sqlite(database_url: Optional[str] = None) -> None:
    """Create the SQLite schema and apply pending migrations."""
    with get_cursor(get_sqlite_connection(database_url)) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY)"
        )
        current_version = _current_version(cursor)
        for version, sql in SQLITE_MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO schema_migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied SQLite migration %s", version)
                current_version = version


def init_postgres(config: Optional[Settings] = None) -> None:
    """Create the PostgreSQL schema and apply pending migrations."""
    with get_cursor(get_postgres_connection(config)) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (version INTEGER PRIMARY KEY)"
        )
        current_version = _current_version(cursor)
        for version, sql in POSTGRES_MIGRATIONS:
            if version > current_version:
                cursor.execute(sql)
                cursor.execute(
                    "INSERT INTO schema_migrations (version) VALUES (%s)", (version,)
                )
                logger.info("Applied PostgreSQL migration %s", version)
                current_version = version
