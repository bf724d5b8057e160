"""
Account Commands.

Register, log in, and manage the saved bearer token used by the remote store.
"""

import asyncio

import typer

from voicenotes.backend.core.exceptions import ApplicationError
from voicenotes.client.api_client import NotesAPIClient, clear_token, load_token, save_token
from voicenotes.cli.output import console

app = typer.Typer(help="Account commands")


def _run(coro_factory) -> object:
    """Run an API client call, printing application errors as exit code 1."""

    async def _call():
        async with NotesAPIClient(token=load_token(), frontend="cli") as client:
            return await coro_factory(client)

    try:
        return asyncio.run(_call())
    except ApplicationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def register(
    name: str = typer.Option(..., "--name", prompt=True, help="Display name"),
    email: str = typer.Option(..., "--email", prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True
    ),
) -> None:
    """Create an account and save its token."""
    auth = _run(lambda client: client.register(name, email, password))
    path = save_token(auth.token)
    console.print(f"[green]Registered[/green] {auth.user.email}")
    console.print(f"[dim]Token saved to {path}[/dim]")


@app.command()
def login(
    email: str = typer.Option(..., "--email", prompt=True, help="Email address"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
) -> None:
    """Log in and save the token."""
    auth = _run(lambda client: client.login(email, password))
    path = save_token(auth.token)
    console.print(f"[green]Logged in as[/green] {auth.user.name} <{auth.user.email}>")
    console.print(f"[dim]Token saved to {path}[/dim]")


@app.command()
def logout() -> None:
    """Forget the saved token."""
    clear_token()
    console.print("[green]Logged out[/green]")


@app.command()
def whoami() -> None:
    """Show the account the saved token belongs to."""
    user = _run(lambda client: client.me())
    console.print(f"{user.name} <{user.email}> [dim]{user.id}[/dim]")


@app.command("reset-password")
def reset_password(
    email: str = typer.Option(..., "--email", prompt=True, help="Email address"),
) -> None:
    """Request a password reset email."""
    message = _run(lambda client: client.request_password_reset(email))
    console.print(message)
