"""Tests for the todo CLI commands."""

import pytest
from typer.testing import CliRunner

from todostore.cli.commands import app
from todostore.db.database import Database
from todostore.db.todos_repository import TodoStore


runner = CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "cli" / "todo.db"


def _invoke(db_path, *args):
    return runner.invoke(app, ["--db", str(db_path), *args])


def _items(db_path):
    db = Database(db_path)
    try:
        return TodoStore(db).list_items()
    finally:
        db.close()


class TestInitCommand:
    """Tests for todo init."""

    def test_init_creates_database(self, db_path):
        result = _invoke(db_path, "init")
        assert result.exit_code == 0
        assert "Database ready" in result.stdout
        assert db_path.exists()

    def test_init_uses_env_location(self, isolated_db_location):
        """Without --db the configured location is used."""
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert isolated_db_location.exists()

    def test_init_unopenable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        result = _invoke(blocker / "todo.db", "init")
        assert result.exit_code == 1
        assert "Cannot create database directory" in result.stdout


class TestAddAndList:
    """Tests for todo add / todo list."""

    def test_list_empty(self, db_path):
        result = _invoke(db_path, "list")
        assert result.exit_code == 0
        assert "No items" in result.stdout

    def test_add_then_list(self, db_path):
        result = _invoke(db_path, "add", "Buy milk")
        assert result.exit_code == 0
        assert "Added" in result.stdout

        result = _invoke(db_path, "list")
        assert result.exit_code == 0
        assert "Buy milk" in result.stdout
        assert "Todos (1)" in result.stdout

    def test_add_done(self, db_path):
        result = _invoke(db_path, "add", "Already done", "--done")
        assert result.exit_code == 0

        items = _items(db_path)
        assert len(items) == 1
        assert items[0].completed is True

    def test_add_blank_title_fails(self, db_path):
        result = _invoke(db_path, "add", "   ")
        assert result.exit_code == 1
        assert "title is required" in result.stdout
        assert _items(db_path) == []


class TestUpdateCommands:
    """Tests for todo update / done / undone."""

    def test_done_and_undone(self, db_path):
        _invoke(db_path, "add", "Walk dog")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "done", str(item_id))
        assert result.exit_code == 0
        assert _items(db_path)[0].completed is True

        result = _invoke(db_path, "undone", str(item_id))
        assert result.exit_code == 0
        assert _items(db_path)[0].completed is False

    def test_update_title_keeps_completed(self, db_path):
        _invoke(db_path, "add", "old", "--done")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "update", str(item_id), "--title", "new")
        assert result.exit_code == 0

        item = _items(db_path)[0]
        assert item.title == "new"
        assert item.completed is True

    def test_update_completed_string(self, db_path):
        _invoke(db_path, "add", "task")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "update", str(item_id), "--completed", "TRUE")
        assert result.exit_code == 0
        assert _items(db_path)[0].completed is True

    def test_update_invalid_completed(self, db_path):
        _invoke(db_path, "add", "task")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "update", str(item_id), "--completed", "maybe")
        assert result.exit_code == 1
        assert "Invalid completed value" in result.stdout

    def test_update_without_options_fails(self, db_path):
        _invoke(db_path, "add", "task")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "update", str(item_id))
        assert result.exit_code == 1
        assert "Nothing to update" in result.stdout
        assert "Updated" not in result.stdout

    def test_update_blank_title_fails(self, db_path):
        _invoke(db_path, "add", "keep me")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "update", str(item_id), "--title", "   ")
        assert result.exit_code == 1
        assert "title is required" in result.stdout
        assert _items(db_path)[0].title == "keep me"

    def test_update_missing_item(self, db_path):
        result = _invoke(db_path, "done", "42")
        assert result.exit_code == 1
        assert "No item with id 42" in result.stdout


class TestDeleteCommand:
    """Tests for todo delete."""

    def test_delete_existing(self, db_path):
        _invoke(db_path, "add", "gone soon")
        item_id = _items(db_path)[0].id

        result = _invoke(db_path, "delete", str(item_id))
        assert result.exit_code == 0
        assert "Deleted" in result.stdout
        assert _items(db_path) == []

    def test_delete_twice(self, db_path):
        _invoke(db_path, "add", "once")
        item_id = _items(db_path)[0].id

        assert _invoke(db_path, "delete", str(item_id)).exit_code == 0
        result = _invoke(db_path, "delete", str(item_id))
        assert result.exit_code == 1
        assert "No item with id" in result.stdout
