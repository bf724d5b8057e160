"""
CLI Output Helpers.

Rich rendering for notes and folders, and the runner every store-backed
command goes through.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import pydantic
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from voicenotes.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ExternalServiceError,
)
from voicenotes.backend.schemas.folder import FolderResponse
from voicenotes.backend.schemas.note import NoteResponse
from voicenotes.client.store import NoteStore, create_note_store, memory_state_path

T = TypeVar("T")
M = TypeVar("M", bound=pydantic.BaseModel)

console = Console()


def run_with_store(
    operation: Callable[[NoteStore], Awaitable[T]],
    store_kind: str | None = None,
) -> T:
    """
    Run an async store operation and close the store afterwards.

    The memory store is snapshotted to client.memory_file, so separate
    invocations share its notes and folders. Application errors are printed
    and turned into exit code 1.
    """

    try:
        store = create_note_store(store_kind, frontend="cli", state_file=memory_state_path())
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    async def _run() -> T:
        try:
            return await operation(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_run())
    except AuthenticationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        console.print("[dim]Log in first with: cli.py auth login[/dim]")
        raise typer.Exit(1)
    except ExternalServiceError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        console.print("[dim]Is the server running? Start with: run.py --action server[/dim]")
        raise typer.Exit(1)
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


def build_input(model_cls: type[M], **fields: Any) -> M:
    """Validate command arguments with a request schema, exiting with the field errors on failure."""
    try:
        return model_cls(**fields)
    except pydantic.ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "input"
            console.print(f"[red]Invalid {field}: {error['msg']}[/red]")
        raise typer.Exit(1)


def notes_table(notes: list[NoteResponse], title: str = "Notes") -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Tags")
    table.add_column("Folder", style="dim")
    table.add_column("Updated")
    table.add_column("")

    for note in notes:
        flags = []
        if note.is_favorite:
            flags.append("[yellow]★[/yellow]")
        if note.has_audio:
            flags.append("♪")
        if note.is_deleted:
            flags.append("[red]trash[/red]")
        table.add_row(
            note.id,
            note.title,
            ", ".join(note.tags) or "-",
            note.folder_id or "-",
            note.updated_at.strftime("%Y-%m-%d %H:%M"),
            " ".join(flags),
        )
    return table


def note_panel(note: NoteResponse) -> Panel:
    lines = [
        f"[dim]id:[/dim] {note.id}",
        f"[dim]folder:[/dim] {note.folder_id or '-'}",
        f"[dim]tags:[/dim] {', '.join(note.tags) or '-'}",
        f"[dim]favorite:[/dim] {'yes' if note.is_favorite else 'no'}",
        f"[dim]in trash:[/dim] {'yes' if note.is_deleted else 'no'}",
        f"[dim]updated:[/dim] {note.updated_at.isoformat(timespec='seconds')}",
    ]
    if note.audio_url:
        lines.append(f"[dim]audio:[/dim] {note.audio_url}")
    if note.content:
        lines.extend(["", note.content])
    return Panel("\n".join(lines), title=note.title)


def folders_table(folders: list[FolderResponse]) -> Table:
    table = Table(title="Folders", show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Color")
    table.add_column("Created")

    for folder in folders:
        table.add_row(
            folder.id,
            folder.name,
            folder.color or "-",
            folder.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table
