"""Fixtures for F1 tests - store layer."""

import pytest

from todostore.db.database import Database
from todostore.db.todos_repository import TodoStore


@pytest.fixture
def db(tmp_path):
    """Initialized Database on a fresh file."""
    database = Database(tmp_path / "store" / "todo.db")
    database.init()
    yield database
    database.close()


@pytest.fixture
def store(db):
    """TodoStore over the fresh database."""
    return TodoStore(db)
