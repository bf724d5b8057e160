"""
Folder Commands.
"""

from typing import Optional

import typer

from voicenotes.backend.schemas.folder import FolderCreate, FolderUpdate
from voicenotes.cli.output import build_input, console, folders_table, run_with_store

app = typer.Typer(help="Folder commands")


@app.command("list")
def list_folders(
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """List folders in creation order."""
    folders = run_with_store(lambda s: s.list_folders(), store)
    if not folders:
        console.print("[dim]No folders[/dim]")
        return
    console.print(folders_table(folders))


@app.command()
def create(
    name: str = typer.Argument(..., help="Folder name"),
    color: Optional[str] = typer.Option(None, "--color", help="Display color, e.g. #ff8800"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Create a folder."""
    data = build_input(FolderCreate, name=name, color=color)
    folder = run_with_store(lambda s: s.create_folder(data), store)
    console.print(f"[green]Created folder[/green] {folder.id}")


@app.command()
def rename(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    name: str = typer.Argument(..., help="New name"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """Rename a folder."""
    data = build_input(FolderUpdate, name=name)
    run_with_store(lambda s: s.update_folder(folder_id, data), store)
    console.print(f"[green]Renamed[/green] {folder_id} -> {name}")


@app.command()
def delete(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    store: Optional[str] = typer.Option(None, "--store", help="Override client.store"),
) -> None:
    """
    Delete a folder.

    Notes in the folder are kept and become unfiled.
    """
    if not yes:
        typer.confirm(f"Delete folder {folder_id}? Its notes will be kept.", abort=True)
    run_with_store(lambda s: s.delete_folder(folder_id), store)
    console.print(f"[red]Deleted folder[/red] {folder_id}")
