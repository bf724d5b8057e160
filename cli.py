#!/usr/bin/env python3
"""
Voice Notes CLI.

Command-line client for managing notes and folders.
Built with Typer for commands and Rich for formatted output. Notes go
through the store selected by client.store in application.yaml
(remote API or in-memory); --store on each command overrides it.

Usage:
    python cli.py --help

    # Account
    python cli.py auth register
    python cli.py auth login
    python cli.py auth whoami

    # Notes
    python cli.py notes list [--trash] [--folder ID] [--favorites] [--tag TAG]
    python cli.py notes create "Title" -c "Body" -t tag
    python cli.py notes show NOTE_ID
    python cli.py notes trash NOTE_ID
    python cli.py notes restore NOTE_ID
    python cli.py notes move NOTE_ID --folder FOLDER_ID
    python cli.py notes delete NOTE_ID

    # Folders
    python cli.py folders list
    python cli.py folders create "Work" --color "#3366ff"
    python cli.py folders delete FOLDER_ID

    # Voice commands
    python cli.py voice match "add tag groceries"
    python cli.py voice commands

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from voicenotes.cli.commands import auth_app, folders_app, notes_app, voice_app

app = typer.Typer(
    name="cli",
    help="Voice Notes CLI - notes, folders, trash, and voice commands.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(auth_app, name="auth")
app.add_typer(notes_app, name="notes")
app.add_typer(folders_app, name="folders")
app.add_typer(voice_app, name="voice")


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Voice Notes CLI.

    Manage notes and folders against the API, or in memory for offline use.
    """
    _validate_project_root()

    from voicenotes.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")


if __name__ == "__main__":
    app()
