"""Database module for SQLite persistence.

Provides:
- Connection management and schema bootstrap (database)
- Error types shared by the store (errors)
- CRUD for the todos table (todos_repository)
"""

from todostore.db.database import Database, get_db, reset_db
from todostore.db.errors import (
    StoreConnectionError,
    StoreError,
    TodoValidationError,
)

__all__ = [
    "Database",
    "get_db",
    "reset_db",
    "StoreConnectionError",
    "StoreError",
    "TodoValidationError",
]
