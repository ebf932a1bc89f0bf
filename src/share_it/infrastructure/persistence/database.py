"""SQLite database with per-operation connections and WAL mode."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import aiosqlite

from share_it.domain.shared.constants import SQLPragmas
from share_it.domain.shared.exceptions import PersistenceError
from share_it.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, settings: DatabaseSettings | None = None) -> None:
        if url.startswith("sqlite:///"):
            self._db_path = url[10:]  # Remove "sqlite:///"
        else:
            self._db_path = url

        self._initialized = False
        self._keepalive_conn: aiosqlite.Connection | None = None
        self._memory_name = f"share-it-{uuid4().hex}"
        self._busy_timeout = settings.busy_timeout_ms if settings else 5000
        self._connection_timeout = settings.connection_timeout_s if settings else 10

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        if self._initialized:
            return

        if self._db_path != ":memory:":
            db_dir = Path(self._db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)

        # Keep one connection alive for in-memory DBs; otherwise the shared
        # in-memory DB is destroyed once the last connection closes.
        if self._db_path == ":memory:" and self._keepalive_conn is None:
            self._keepalive_conn = await self._connect()

        async with self.transaction() as conn:
            await self._ensure_schema(conn)

        self._initialized = True
        logger.info(LogTemplates.DATABASE_INITIALIZED, self._db_path)

    async def _ensure_schema(self, conn: aiosqlite.Connection) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY,
                username TEXT NOT NULL,
                avatar_url TEXT NOT NULL DEFAULT '',
                permalink_url TEXT NOT NULL DEFAULT '',
                active_playlist_id TEXT,
                playlists_json TEXT NOT NULL DEFAULT '{}'
            )
            """
        )

        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS chatrooms (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                moderator_id INTEGER NOT NULL,
                version INTEGER NOT NULL DEFAULT 0,
                state_json TEXT NOT NULL
            )
            """
        )
        await conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_chatrooms_moderator ON chatrooms(moderator_id)"
        )

    async def _connect(self) -> aiosqlite.Connection:
        # SQLite ":memory:" is per-connection, so use a shared URI to allow
        # multiple connections to see the same in-memory database.
        if self._db_path == ":memory:":
            db_path = f"file:{self._memory_name}?mode=memory&cache=shared"
            uri = True
        else:
            db_path = self._db_path
            uri = False

        try:
            conn = await aiosqlite.connect(
                db_path,
                uri=uri,
                timeout=self._connection_timeout,
            )
        except aiosqlite.Error as e:
            logger.error(LogTemplates.DATABASE_ERROR, "connect", e)
            raise PersistenceError(
                "connect", ErrorMessages.STORAGE_UNREACHABLE.format(location=self._db_path)
            ) from e

        conn.row_factory = aiosqlite.Row

        try:
            # WAL improves concurrent read behavior and reduces writer blocking.
            await conn.execute(SQLPragmas.JOURNAL_MODE_WAL)
            await conn.execute(SQLPragmas.BUSY_TIMEOUT.format(timeout=self._busy_timeout))
        except aiosqlite.Error as e:
            await conn.close()
            logger.error(LogTemplates.DATABASE_ERROR, "configure", e)
            raise PersistenceError("configure", str(e)) from e

        return conn

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Open a connection; driver errors surface as PersistenceError."""
        conn = await self._connect()
        try:
            yield conn
        except aiosqlite.Error as e:
            await self._rollback_quietly(conn)
            logger.error(LogTemplates.DATABASE_ERROR, "query", e)
            raise PersistenceError("query", str(e)) from e
        except Exception:
            await self._rollback_quietly(conn)
            raise
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Get a transaction context manager with auto-commit/rollback."""
        async with self.connection() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def execute(self, sql: str, parameters: tuple[Any, ...] | None = None) -> int:
        """Execute a SQL statement and return the number of affected rows.

        Note:
            This always runs in its own transaction. If you need multiple
            statements to commit/rollback together, use `transaction()` and the
            returned connection directly.
        """
        async with self.transaction() as conn:
            if parameters is not None:
                cursor = await conn.execute(sql, parameters)
            else:
                cursor = await conn.execute(sql)
            return cursor.rowcount

    async def fetch_one(
        self, sql: str, parameters: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Fetch a single row."""
        async with self.connection() as conn:
            if parameters is not None:
                cursor = await conn.execute(sql, parameters)
            else:
                cursor = await conn.execute(sql)
            row = await cursor.fetchone()
            return dict(row) if row else None

    async def close(self) -> None:
        """Close the database manager.

        For file-based DBs this is mostly a no-op. For in-memory DBs we also
        close the keepalive connection.
        """
        if self._keepalive_conn is not None:
            try:
                await self._keepalive_conn.close()
            finally:
                self._keepalive_conn = None
        self._initialized = False
        logger.info(LogTemplates.DATABASE_CLOSED)

    @staticmethod
    async def _rollback_quietly(conn: aiosqlite.Connection) -> None:
        try:
            await conn.rollback()
        except aiosqlite.Error:
            pass
