from __future__ import annotations
from pathlib import Path
from typing import Optional
import typer
import uvicorn
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from .app import create_app
from .config import Settings
from .editing import EditSession
from .errors import NoteNotFoundError, StoreError
from .filtering import ListState, derive_list
from .log import configure_logging
from .store import NoteStore

app = typer.Typer(help="QuickNote: small local notes")
console = Console()


@app.callback()
def _boot(
    ctx: typer.Context,
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite file (default: $QUICKNOTE_DB_PATH)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level)
    try:
        store = NoteStore.open(db or settings.db_path)
    except StoreError as e:
        console.print(f"[red]Cannot open notes[/]: {e}")
        raise typer.Exit(1)
    ctx.obj = store
    ctx.call_on_close(store.close)


def _find(store: NoteStore, note_id: int):
    n = store.get(note_id)
    if not n:
        console.print(f"[red]Not found[/]: {note_id}")
        raise typer.Exit(1)
    return n


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Option("", "--title", "-t"),
    content: str = typer.Option("", "--content", "-c"),
):
    n = ctx.obj.add(title, content)
    console.print(f"[green]Created[/] #{n.id}: {n.title}")


@app.command("list")
def _list(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="substring of title or content"),
):
    view = derive_list(ctx.obj.search(""), search)
    if view.state is not ListState.POPULATED:
        console.print("[dim]No notes yet[/]" if view.store_is_empty else "[dim]No notes found[/]")
        return
    table = Table(title="Notes")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Content")
    table.add_column("Updated")
    for n in view.notes:
        table.add_row(str(n.id), n.title, n.content, n.updated_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@app.command()
def show(ctx: typer.Context, note_id: int):
    n = _find(ctx.obj, note_id)
    console.rule(f"#{n.id} {n.title}")
    console.print(Markdown(n.content or "_<empty>_"))


@app.command()
def edit(
    ctx: typer.Context,
    note_id: int,
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    content: Optional[str] = typer.Option(None, "--content", "-c"),
):
    try:
        session = EditSession.open(ctx.obj, note_id, autosave=False)
    except NoteNotFoundError:
        console.print(f"[red]Not found[/]: {note_id}")
        raise typer.Exit(1)
    if title is not None:
        session.set_title(title)
    if content is not None:
        session.set_content(content)
    n = session.save()
    console.print(f"[green]Updated[/] #{n.id}: {n.title}")


@app.command()
def delete(ctx: typer.Context, note_id: int):
    ctx.obj.delete_by_id(note_id)
    console.print(f"[yellow]Deleted[/]: #{note_id}")


@app.command()
def clear(ctx: typer.Context, yes: bool = typer.Option(False, "--yes", "-y")):
    if not yes and not typer.confirm("Delete ALL notes?"):
        raise typer.Abort()
    count = ctx.obj.delete_all()
    console.print(f"[red]Deleted all[/] ({count} notes)")


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
):
    uvicorn.run(create_app(ctx.obj), host=host, port=port)


def main():
    app()


if __name__ == "__main__":
    main()
