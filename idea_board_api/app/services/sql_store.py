"""
Durable idea stores backed by a relational table.

``SQLiteIdeaStore`` keeps ideas in an embedded SQLite file and
``PostgresIdeaStore`` in a PostgreSQL server.  Both open a connection
per operation and close it when done.  Each operation touches at most
one row, so no explicit transaction handling beyond the driver
default is needed; an upvote is a single ``UPDATE ... SET upvotes =
upvotes + 1`` and relies on the engine's row locking.

All queries use parameterized statements.  Driver errors are logged
with their traceback and re‑raised as ``StoreError`` so callers never
see driver‑specific exceptions.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, List, Optional, Tuple, Type

import psycopg2

from ..core.config import Settings
from ..core.db import (
    get_cursor,
    get_postgres_connection,
    get_sqlite_connection,
    init_postgres,
    init_sqlite,
)
from ..core.exceptions import NotFoundError, StoreError
from ..schemas.idea import IdeaRead
from .idea_store import IdeaStore, utcnow

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def row_to_idea(row: Any) -> IdeaRead:
    """Convert a database row (``sqlite3.Row`` or dict) to an ``IdeaRead``."""
    return IdeaRead(
        id=str(row["id"]),
        text=row["text"],
        upvotes=row["upvotes"],
        created_at=_parse_timestamp(row["created_at"]),
    )


class _SQLIdeaStore(IdeaStore):
    """Shared error handling for the relational stores."""

    driver_error: Tuple[Type[BaseException], ...] = ()
    name = "sql"

    def _connect(self) -> Any:
        raise NotImplementedError

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except self.driver_error as exc:
            logger.exception("%s store failed to %s", self.name, action)
            raise StoreError(f"Failed to {action}") from exc

    def ping(self) -> bool:
        try:
            with get_cursor(self._connect()) as cursor:
                cursor.execute("SELECT 1")
            return True
        except self.driver_error:
            logger.warning("%s store is not reachable", self.name)
            return False


class SQLiteIdeaStore(_SQLIdeaStore):
    """Ideas persisted in a SQLite database file."""

    driver_error = (sqlite3.Error,)
    name = "SQLite"

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url

    def _connect(self) -> sqlite3.Connection:
        return get_sqlite_connection(self.database_url)

    def init(self) -> None:
        with self._errors("initialise schema"):
            init_sqlite(self.database_url)

    def list(self) -> List[IdeaRead]:
        with self._errors("fetch ideas"):
            with get_cursor(self._connect()) as cursor:
                # rowid keeps ties deterministic, newest insert first.
                rows = cursor.execute(
                    "SELECT id, text, upvotes, created_at FROM ideas "
                    "ORDER BY upvotes DESC, created_at DESC, rowid DESC"
                ).fetchall()
        return [row_to_idea(row) for row in rows]

    def create(self, text: str) -> IdeaRead:
        idea_id = str(uuid.uuid4())
        created_at = utcnow().isoformat(timespec="microseconds")
        with self._errors("create idea"):
            with get_cursor(self._connect()) as cursor:
                cursor.execute(
                    "INSERT INTO ideas (id, text, upvotes, created_at) VALUES (?, ?, 0, ?)",
                    (idea_id, text, created_at),
                )
                row = cursor.execute(
                    "SELECT id, text, upvotes, created_at FROM ideas WHERE id = ?",
                    (idea_id,),
                ).fetchone()
        logger.info("Created idea %s", idea_id)
        return row_to_idea(row)

    def upvote(self, idea_id: str) -> IdeaRead:
        with self._errors("upvote idea"):
            with get_cursor(self._connect()) as cursor:
                cursor.execute(
                    "UPDATE ideas SET upvotes = upvotes + 1 WHERE id = ?",
                    (idea_id,),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(idea_id)
                row = cursor.execute(
                    "SELECT id, text, upvotes, created_at FROM ideas WHERE id = ?",
                    (idea_id,),
                ).fetchone()
        return row_to_idea(row)


class PostgresIdeaStore(_SQLIdeaStore):
    """Ideas persisted in a PostgreSQL table shared by every API instance."""

    driver_error = (psycopg2.Error,)
    name = "PostgreSQL"

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config

    def _connect(self) -> Any:
        return get_postgres_connection(self.config)

    def init(self) -> None:
        with self._errors("initialise schema"):
            init_postgres(self.config)

    def list(self) -> List[IdeaRead]:
        with self._errors("fetch ideas"):
            with get_cursor(self._connect()) as cursor:
                cursor.execute(
                    "SELECT id, text, upvotes, created_at FROM ideas "
                    "ORDER BY upvotes DESC, created_at DESC"
                )
                rows = cursor.fetchall()
        return [row_to_idea(row) for row in rows]

    def create(self, text: str) -> IdeaRead:
        with self._errors("create idea"):
            with get_cursor(self._connect()) as cursor:
                cursor.execute(
                    "INSERT INTO ideas (text) VALUES (%s) RETURNING id, text, upvotes, created_at",
                    (text,),
                )
                row = cursor.fetchone()
        idea = row_to_idea(row)
        logger.info("Created idea %s", idea.id)
        return idea

    def upvote(self, idea_id: str) -> IdeaRead:
        # A malformed UUID cannot match any row; PostgreSQL would reject it
        # with a type error instead.
        try:
            uuid.UUID(idea_id)
        except ValueError:
            raise NotFoundError(idea_id) from None
        with self._errors("upvote idea"):
            with get_cursor(self._connect()) as cursor:
                cursor.execute(
                    "UPDATE ideas SET upvotes = upvotes + 1 WHERE id = %s "
                    "RETURNING id, text, upvotes, created_at",
                    (idea_id,),
                )
                row = cursor.fetchone()
        if row is None:
            raise NotFoundError(idea_id)
        return row_to_idea(row)
