"""
Voice Command Commands.

Try transcripts against the built-in voice command set.
"""

from typing import Optional

import typer
from rich.table import Table

from voicenotes.client.voice_commands import DEFAULT_COMMANDS, CommandGate, match_command
from voicenotes.cli.output import console

app = typer.Typer(help="Voice command matching")


@app.command("match")
def match(
    transcript: list[str] = typer.Argument(..., help="Recognized speech, one or more transcripts"),
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Minimum seconds between accepted commands"
    ),
) -> None:
    """
    Match transcripts against the command set.

    Several transcripts are processed in order through the same rate-limit
    gate, the way a burst of recognition results would be.

    Examples:
        cli.py voice match "add tag groceries"
        cli.py voice match "bold" "bold" --interval 1.5
    """
    gate = CommandGate(min_interval=interval)
    any_matched = False
    for text in transcript:
        matched = match_command(text, DEFAULT_COMMANDS)
        if matched is None:
            console.print(f"[dim]{text!r}: no command[/dim]")
            continue
        if not gate.accept():
            console.print(f"[yellow]{text!r}: {matched.command.name} (ignored, too soon)[/yellow]")
            continue
        any_matched = True
        args = f" args={matched.args!r}" if matched.args else ""
        console.print(f"[green]{text!r}: {matched.command.name}[/green]{args}")

    if not any_matched:
        raise typer.Exit(1)


@app.command("commands")
def list_commands() -> None:
    """List the built-in voice commands and their phrases."""
    table = Table(title="Voice Commands", show_header=True)
    table.add_column("Command", style="cyan")
    table.add_column("Description")
    table.add_column("Phrases", style="dim")

    for command in DEFAULT_COMMANDS:
        table.add_row(command.name, command.description, ", ".join(command.phrases))

    console.print(table)
