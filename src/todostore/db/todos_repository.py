"""Repository for the todos table.

Provides list/add/update/delete for todo items over a ``Database``.
Writes read their outcome through RETURNING (SQLite 3.35+) rather than
cursor.lastrowid/rowcount, which reflect whatever statement last ran on the
shared connection.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

from todostore.db.database import TABLE_NAME, Database, get_db
from todostore.db.errors import StoreConnectionError
from todostore.utils.validators import (
    coerce_completed,
    from_db_bool,
    validate_title,
)

logger = structlog.get_logger(__name__)


@dataclass
class TodoItem:
    """Todo item as returned by the store."""

    id: int
    title: str
    completed: bool


@contextmanager
def _statement(operation: str) -> Iterator[None]:
    """Re-raise driver errors as StoreConnectionError."""
    try:
        yield
    except sqlite3.Error as e:
        logger.error("todos.statement_failed", operation=operation, error=str(e))
        raise StoreConnectionError(f"{operation} failed: {e}", operation=operation) from e


class TodoStore:
    """CRUD over the ``todos`` table of one Database."""

    def __init__(self, db: Database):
        self.db = db

    def list_items(self) -> list[TodoItem]:
        """Get all items in insertion (id) order.

        Returns:
            List of TodoItem, empty if the table has no rows
        """
        conn = self.db.connection()
        with _statement("list"):
            rows = conn.execute(
                f"SELECT id, title, completed FROM {TABLE_NAME} ORDER BY id ASC"
            ).fetchall()

        return [_row_to_item(row) for row in rows]

    def add_item(self, title: Any, completed: Any = None) -> TodoItem:
        """Insert a new item.

        Args:
            title: Non-blank title, stored as given
            completed: Raw completed value; unrecognized input means False

        Returns:
            The created TodoItem with its database-assigned id

        Raises:
            TodoValidationError: If title is missing or blank
        """
        validate_title(title)
        completed_db = coerce_completed(completed).resolve(default=False)

        conn = self.db.connection()
        with _statement("add"):
            (row,) = conn.execute(
                f"INSERT INTO {TABLE_NAME} (title, completed) VALUES (?, ?) RETURNING id",
                (title, completed_db),
            ).fetchall()

        item = TodoItem(
            id=row["id"],
            title=title,
            completed=from_db_bool(completed_db),
        )
        logger.debug("todos.inserted", id=item.id, completed=item.completed)
        return item

    def get_item(self, item_id: Any) -> TodoItem | None:
        """Get item by id.

        Returns:
            TodoItem if found, None otherwise
        """
        if item_id is None:
            return None

        conn = self.db.connection()
        with _statement("get"):
            row = conn.execute(
                f"SELECT id, title, completed FROM {TABLE_NAME} WHERE id = ?",
                (item_id,),
            ).fetchone()

        if row is None:
            return None
        return _row_to_item(row)

    def update_item(self, item_id: Any, patch: Mapping[str, Any] | None = None) -> bool:
        """Merge ``patch`` into an existing item.

        Omitted fields keep their stored values. A blank or non-string title
        counts as omitted, as does a completed value that doesn't coerce.

        Args:
            item_id: Item id
            patch: Mapping with optional "title" and "completed"

        Returns:
            True if updated, False if item_id is None or not found
        """
        if item_id is None:
            return False

        patch = patch or {}
        conn = self.db.connection()

        with _statement("update"):
            existing = conn.execute(
                f"SELECT id, title, completed FROM {TABLE_NAME} WHERE id = ?",
                (item_id,),
            ).fetchone()

        if existing is None:
            return False

        new_title = patch.get("title")
        if not isinstance(new_title, str) or not new_title.strip():
            new_title = existing["title"]

        new_completed = coerce_completed(patch.get("completed")).resolve(
            default=from_db_bool(existing["completed"])
        )

        with _statement("update"):
            written = conn.execute(
                f"UPDATE {TABLE_NAME} SET title = ?, completed = ? WHERE id = ? RETURNING id",
                (new_title, new_completed, item_id),
            ).fetchall()

        if not written:
            # Row existed a moment ago; a concurrent delete won the race
            logger.warning("todos.update_vanished", id=item_id)
            return False

        logger.debug("todos.updated", id=item_id)
        return True

    def delete_item(self, item_id: Any) -> bool:
        """Delete item by id.

        Returns:
            True if deleted, False if not found
        """
        conn = self.db.connection()
        with _statement("delete"):
            removed = conn.execute(
                f"DELETE FROM {TABLE_NAME} WHERE id = ? RETURNING id", (item_id,)
            ).fetchall()

        deleted = len(removed) > 0
        if deleted:
            logger.debug("todos.deleted", id=item_id)

        return deleted


def get_store() -> TodoStore:
    """Store bound to the process-wide Database."""
    return TodoStore(get_db())


def _row_to_item(row: sqlite3.Row) -> TodoItem:
    """Convert database row to TodoItem."""
    return TodoItem(
        id=row["id"],
        title=row["title"],
        completed=from_db_bool(row["completed"]),
    )
