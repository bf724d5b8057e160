"""
Note Commands.

Create, browse, and move notes through their trash lifecycle.
"""

from typing import Optional

import typer

from voicenotes.backend.schemas.note import NoteCreate, NoteUpdate
from voicenotes.cli.output import build_input, console, note_panel, notes_table, run_with_store

app = typer.Typer(help="Note commands")


@app.command("list")
def list_notes(
    trash: bool = typer.Option(False, "--trash", help="Include notes in the trash"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Only notes in this folder"),
    favorites: bool = typer.Option(False, "--favorites", help="Only favorite notes"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only notes with this tag"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store (remote or memory)"),
) -> None:
    """
    List notes, most recently updated first.

    Examples:
        cli.py notes list
        cli.py notes list --trash --tag work
    """
    notes = run_with_store(
        lambda s: s.list_notes(
            include_deleted=trash,
            folder_id=folder,
            favorites_only=favorites,
            tag=tag,
        ),
        store,
    )
    if not notes:
        console.print("[dim]No notes[/dim]")
        return
    console.print(notes_table(notes))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in titles and content"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum number of results"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Search active notes."""
    notes = run_with_store(lambda s: s.search_notes(query, limit=limit), store)
    console.print(notes_table(notes, title=f"Notes matching '{query}'"))


@app.command()
def show(
    note_id: str = typer.Argument(..., help="Note ID"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Show a single note."""
    note = run_with_store(lambda s: s.get_note(note_id), store)
    console.print(note_panel(note))


@app.command()
def create(
    title: str = typer.Argument(..., help="Note title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Note body"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable)"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Folder ID"),
    favorite: bool = typer.Option(False, "--favorite", help="Mark as favorite"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes create "Groceries" -c "milk, eggs" -t home
    """
    data = build_input(
        NoteCreate,
        title=title,
        content=content,
        tags=tag,
        folder_id=folder,
        is_favorite=favorite,
    )
    note = run_with_store(lambda s: s.create_note(data), store)
    console.print(f"[green]Created note[/green] {note.id}")


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New body"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Replace tags (repeatable)"),
    favorite: Optional[bool] = typer.Option(None, "--favorite/--no-favorite", help="Favorite flag"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Update a note. Only the given fields change."""
    fields = {
        "title": title,
        "content": content,
        "tags": tag or None,
        "is_favorite": favorite,
    }
    data = build_input(
        NoteUpdate, **{key: value for key, value in fields.items() if value is not None}
    )
    note = run_with_store(lambda s: s.update_note(note_id, data), store)
    console.print(note_panel(note))


@app.command()
def trash(
    note_id: str = typer.Argument(..., help="Note ID"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Move a note to the trash."""
    run_with_store(lambda s: s.move_note_to_trash(note_id), store)
    console.print(f"[yellow]Moved to trash[/yellow] {note_id}")


@app.command()
def restore(
    note_id: str = typer.Argument(..., help="Note ID"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Restore a note from the trash."""
    run_with_store(lambda s: s.restore_note_from_trash(note_id), store)
    console.print(f"[green]Restored[/green] {note_id}")


@app.command()
def move(
    note_id: str = typer.Argument(..., help="Note ID"),
    folder: Optional[str] = typer.Option(
        None, "--folder", "-f", help="Target folder ID; omit to unfile the note"
    ),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Move a note into a folder, or out of any folder."""
    run_with_store(lambda s: s.move_note_to_folder(note_id, folder), store)
    target = folder or "no folder"
    console.print(f"[green]Moved[/green] {note_id} -> {target}")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Delete a note permanently."""
    if not yes:
        typer.confirm(f"Delete note {note_id} permanently?", abort=True)
    run_with_store(lambda s: s.delete_note_permanently(note_id), store)
    console.print(f"[red]Deleted[/red] {note_id}")


@app.command("empty-trash")
def empty_trash(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Permanently delete every note in the trash."""
    if not yes:
        typer.confirm("Permanently delete all notes in the trash?", abort=True)
    deleted = run_with_store(lambda s: s.empty_trash(), store)
    console.print(f"[red]Deleted {deleted} note(s)[/red]")
