"""CLI commands for the todo store.

Commands:
- init: Create the database and todos table
- list: Show all items
- add: Add an item
- update: Change title and/or completed flag
- done / undone: Mark an item completed or not
- delete: Remove an item
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from todostore.db.database import Database
from todostore.db.errors import StoreConnectionError, TodoValidationError
from todostore.db.todos_repository import TodoStore
from todostore.utils.validators import Completion, coerce_completed

app = typer.Typer(
    name="todo",
    help="Manage a SQLite-backed to-do list.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    db: str | None = typer.Option(
        None, "--db", help="Database file (default: SQLITE_DB_LOCATION or config)"
    ),
) -> None:
    """Manage a SQLite-backed to-do list."""
    ctx.obj = Path(db).expanduser() if db else None


def _open_store(ctx: typer.Context) -> TodoStore:
    """Open the store or exit with code 1."""
    database = Database(ctx.obj)
    try:
        database.init()
    except StoreConnectionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    ctx.call_on_close(database.close)
    return TodoStore(database)


def _not_found(item_id: int) -> None:
    console.print(f"[yellow]⚠ No item with id {item_id}[/yellow]")
    raise typer.Exit(code=1)


@app.command()
def init(ctx: typer.Context) -> None:
    """Create the database and todos table if missing."""
    store = _open_store(ctx)
    console.print(f"[green]✓ Database ready[/green]  [dim]{store.db.path}[/dim]")


@app.command(name="list")
def list_items(ctx: typer.Context) -> None:
    """List all items in insertion order."""
    store = _open_store(ctx)

    try:
        items = store.list_items()
    except StoreConnectionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if not items:
        console.print("[yellow]No items[/yellow]")
        console.print("  Use: todo add <title>")
        return

    table = Table(title=f"Todos ({len(items)})")
    table.add_column("id", justify="right")
    table.add_column("done", justify="center")
    table.add_column("title")
    for item in items:
        mark = "[green]✓[/green]" if item.completed else ""
        table.add_row(str(item.id), mark, item.title)

    console.print(table)


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Item title"),
    completed: bool = typer.Option(False, "--done", "-d", help="Create as completed"),
) -> None:
    """Add an item."""
    store = _open_store(ctx)

    try:
        item = store.add_item(title, completed=completed)
    except TodoValidationError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    except StoreConnectionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Added[/green] #{item.id} {item.title}")


@app.command()
def update(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Item id"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    completed: str | None = typer.Option(
        None, "--completed", "-c", help="true/false/1/0"
    ),
) -> None:
    """Change an item's title and/or completed flag."""
    patch: dict[str, object] = {}
    if title is not None:
        if not title.strip():
            console.print("[red]✗ title is required[/red]")
            raise typer.Exit(code=1)
        patch["title"] = title
    if completed is not None:
        if coerce_completed(completed) is Completion.UNSPECIFIED:
            console.print(f"[red]✗ Invalid completed value: {completed!r}[/red]")
            raise typer.Exit(code=1)
        patch["completed"] = completed

    if not patch:
        console.print("[red]✗ Nothing to update: pass --title and/or --completed[/red]")
        raise typer.Exit(code=1)

    _apply_update(ctx, item_id, patch)


@app.command()
def done(ctx: typer.Context, item_id: int = typer.Argument(..., help="Item id")) -> None:
    """Mark an item completed."""
    _apply_update(ctx, item_id, {"completed": True})


@app.command()
def undone(ctx: typer.Context, item_id: int = typer.Argument(..., help="Item id")) -> None:
    """Mark an item not completed."""
    _apply_update(ctx, item_id, {"completed": False})


def _apply_update(ctx: typer.Context, item_id: int, patch: dict[str, object]) -> None:
    store = _open_store(ctx)

    try:
        updated = store.update_item(item_id, patch)
    except StoreConnectionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if not updated:
        _not_found(item_id)

    console.print(f"[green]✓ Updated[/green] #{item_id}")


@app.command()
def delete(ctx: typer.Context, item_id: int = typer.Argument(..., help="Item id")) -> None:
    """Delete an item."""
    store = _open_store(ctx)

    try:
        deleted = store.delete_item(item_id)
    except StoreConnectionError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if not deleted:
        _not_found(item_id)

    console.print(f"[green]✓ Deleted[/green] #{item_id}")
