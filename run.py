#!/usr/bin/env python3
"""
Application Entry Script.

Operator entry point for the Voice Notes backend. All functionality is
accessible through command-line options.

Usage:
    python run.py --help
    python run.py --action server --reload --verbose
    python run.py --action health
    python run.py --action config
    python run.py --action migrate --migrate-action upgrade
    python run.py --action test --test-type unit
"""

import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from voicenotes.backend.core.logging import get_logger, setup_logging

ALEMBIC_INI = PROJECT_ROOT / "voicenotes" / "backend" / "migrations" / "alembic.ini"


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "health", "config", "migrate", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--migrate-action",
    type=click.Choice(["upgrade", "downgrade", "current", "history", "autogenerate"]),
    default="upgrade",
    help="Alembic operation (for migrate action).",
)
@click.option(
    "--revision",
    default="head",
    help="Target revision (for upgrade/downgrade).",
)
@click.option(
    "--message", "-m",
    default=None,
    help="Revision message (for autogenerate).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    migrate_action: str,
    revision: str,
    message: str | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Voice Notes Entry Point.

    Run the API server, check health, view configuration, apply
    migrations, or run tests.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Apply all migrations
        python run.py --action migrate

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "health":
        check_health(logger)
    elif action == "config":
        show_config(logger)
    elif action == "migrate":
        run_migrations(logger, migrate_action, revision, message)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from voicenotes.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "voicenotes.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def check_health(logger) -> None:
    """Check application health by loading configuration and the app (no server needed)."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from voicenotes.backend.core.config import get_app_config

        app_config = get_app_config()
        checks.append(("YAML configuration", True, f"App: {app_config.application.name}"))
    except Exception as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", extra={"error": str(e)})

    try:
        from voicenotes.backend.core.config import get_settings

        get_settings()
        checks.append(("Secrets (.env)", True, None))
    except Exception as e:
        checks.append(("Secrets (.env)", False, str(e)))
        logger.warning("Secrets not configured", extra={"error": str(e)})

    try:
        from voicenotes.backend.core.startup_checks import run_startup_checks

        run_startup_checks()
        checks.append(("Security checks", True, None))
    except Exception as e:
        checks.append(("Security checks", False, str(e)))

    try:
        from voicenotes.backend.main import get_app

        fastapi_app = get_app()
        checks.append(("FastAPI application", True, f"{len(fastapi_app.routes)} routes"))
    except Exception as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", extra={"error": str(e)})

    try:
        from voicenotes.backend.models import Base

        checks.append(("Database models", True, ", ".join(sorted(Base.metadata.tables))))
    except Exception as e:
        checks.append(("Database models", False, str(e)))

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("PASS", fg="green") if passed else click.style("FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        if not passed:
            all_passed = False

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        click.echo("Note: secrets require config/.env (see config/.env.example).")
        sys.exit(1)


def _echo_section(title: str, values: dict, indent: int = 2) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    _echo_values(values, indent)


def _echo_values(values: dict, indent: int) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_values(value, indent + 2)
        else:
            click.echo(f"{pad}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration. Secrets are never printed."""
    click.echo("Application Configuration:")

    try:
        from voicenotes.backend.core.config import get_app_config

        app_config = get_app_config()
        _echo_section("Application Settings", app_config.application.model_dump())
        _echo_section("Database Settings", app_config.database.model_dump())
        _echo_section("Logging Settings", app_config.logging.model_dump())
        _echo_section("Feature Flags", app_config.features.model_dump())
        _echo_section("Security Settings", app_config.security.model_dump())

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def run_migrations(
    logger,
    migrate_action: str,
    revision: str,
    message: str | None,
) -> None:
    """Run database migrations using Alembic."""
    logger.info(
        "Running migrations",
        extra={"action": migrate_action, "revision": revision},
    )

    if not ALEMBIC_INI.exists():
        click.echo(
            click.style("Error: voicenotes/backend/migrations/alembic.ini not found.", fg="red"),
            err=True,
        )
        sys.exit(1)

    cmd = [sys.executable, "-m", "alembic", "-c", str(ALEMBIC_INI)]

    if migrate_action == "upgrade":
        cmd.extend(["upgrade", revision])
        click.echo(f"Upgrading database to revision: {revision}")
    elif migrate_action == "downgrade":
        cmd.extend(["downgrade", revision])
        click.echo(f"Downgrading database to revision: {revision}")
    elif migrate_action == "current":
        cmd.append("current")
    elif migrate_action == "history":
        cmd.extend(["history", "--verbose"])
    elif migrate_action == "autogenerate":
        if not message:
            click.echo(
                click.style("Error: --message/-m required for autogenerate.", fg="red"),
                err=True,
            )
            sys.exit(1)
        cmd.extend(["revision", "--autogenerate", "-m", message])
        click.echo(f"Generating migration: {message}")

    try:
        result = subprocess.run(cmd, cwd=PROJECT_ROOT)
    except FileNotFoundError:
        logger.error("alembic not found. Install with: pip install alembic")
        sys.exit(1)

    if result.returncode != 0:
        logger.error("Migration failed", extra={"exit_code": result.returncode})
        sys.exit(result.returncode)
    logger.info("Migration completed successfully")


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=voicenotes", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e .[test]")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from voicenotes.backend.core.config import get_app_config

    app = get_app_config().application
    click.echo(app.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app.version}")
    click.echo(f"Description: {app.description}")
    click.echo(f"Environment: {app.environment}")
    click.echo(f"API: http://{app.server.host}:{app.server.port}{app.api_prefix}")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server    Start the API server")
    click.echo("  --action health    Check configuration and app wiring")
    click.echo("  --action config    Display configuration")
    click.echo("  --action migrate   Run Alembic migrations")
    click.echo("  --action test      Run test suite")
    click.echo("  --action info      Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v      Enable INFO level logging")
    click.echo("  --debug, -d        Enable DEBUG level logging")
    click.echo()
    click.echo("Notes are managed with the user CLI: python cli.py --help")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
