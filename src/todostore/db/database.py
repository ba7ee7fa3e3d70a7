"""SQLite connection and schema management.

One ``Database`` owns one connection, opened on first use and reused by every
operation afterwards. Opening is guarded by a lock so concurrent first callers
run the schema setup exactly once and all observe the same handle.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

import structlog

from todostore.config.app_config import load_app_config
from todostore.db.errors import StoreConnectionError

logger = structlog.get_logger(__name__)

TABLE_NAME = "todos"

# INSERT/UPDATE/DELETE ... RETURNING
MIN_SQLITE_VERSION = (3, 35, 0)

SCHEMA_DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 0
);
"""


class Database:
    """Lazily opened SQLite connection holding the ``todos`` table."""

    def __init__(
        self,
        path: Path | str | None = None,
        busy_timeout_ms: int | None = None,
    ):
        config = load_app_config()
        self.path: Path = Path(path) if path is not None else config.db_location
        self.busy_timeout_ms = (
            busy_timeout_ms if busy_timeout_ms is not None else config.busy_timeout_ms
        )
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._conn is not None

    def init(self) -> sqlite3.Connection:
        """Open the database and create the schema (idempotent).

        Returns:
            The shared connection.

        Raises:
            StoreConnectionError: If the file cannot be opened or the schema
                statement fails. Nothing is cached on failure.
        """
        conn = self._conn
        if conn is not None:
            return conn

        with self._lock:
            if self._conn is None:
                self._conn = self._open()
            return self._conn

    # Callers only ever need the initialized connection
    connection = init

    def _open(self) -> sqlite3.Connection:
        _check_sqlite_version()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreConnectionError(
                f"Cannot create database directory {self.path.parent}: {e}",
                operation="init",
            ) from e

        conn: sqlite3.Connection | None = None
        try:
            # Autocommit: each statement is its own transaction
            conn = sqlite3.connect(
                str(self.path),
                timeout=self.busy_timeout_ms / 1000,
                check_same_thread=False,
                isolation_level=None,
            )
            conn.row_factory = sqlite3.Row
            conn.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}")
            _create_schema(conn)
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            logger.error("database.init_failed", path=str(self.path), error=str(e))
            raise StoreConnectionError(
                f"Cannot open database {self.path}: {e}", operation="init"
            ) from e

        logger.info("database.initialized", path=str(self.path))
        return conn

    def close(self) -> None:
        """Close the connection. A later ``init()`` reopens it."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None


def _check_sqlite_version() -> None:
    """Refuse SQLite builds without RETURNING support."""
    if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
        required = ".".join(str(part) for part in MIN_SQLITE_VERSION)
        raise StoreConnectionError(
            f"SQLite {required} or newer is required, found {sqlite3.sqlite_version}",
            operation="init",
        )


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create the todos table if it doesn't exist."""
    conn.executescript(SCHEMA_DDL)


# -- module singleton ----------------------------------------------------------

_default_db: Database | None = None
_default_lock = threading.Lock()


def get_db(path: Path | str | None = None) -> Database:
    """Return (and lazily initialise) the process-wide Database.

    ``path`` only takes effect on the first call.
    """
    global _default_db
    with _default_lock:
        if _default_db is None:
            _default_db = Database(path)
        db = _default_db
    db.init()
    return db


def reset_db() -> None:
    """Close and discard the process-wide Database (useful in tests)."""
    global _default_db
    with _default_lock:
        db, _default_db = _default_db, None
    if db is not None:
        db.close()
