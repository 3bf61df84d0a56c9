#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for CloudNotes. All functionality is accessible through
command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action initdb
    python run.py --action config
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from cloudnotes.backend.core.logging import get_logger, setup_logging


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
    type=click.Choice(["server", "initdb", "config", "info"]),
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
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    CloudNotes Entry Point.

    Run the API server, create the database tables, or view configuration.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Create tables in the configured database
        python run.py --action initdb

        # View loaded configuration
        python run.py --action config
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
    elif action == "initdb":
        init_database(logger)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the API server under uvicorn."""
    from cloudnotes.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "cloudnotes.backend.main:app",
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


def init_database(logger) -> None:
    """Create the users and notes tables if they do not exist."""
    from cloudnotes.backend.core.database import Database

    async def _create() -> None:
        database = Database.from_config()
        try:
            await database.create_schema()
        finally:
            await database.dispose()

    try:
        asyncio.run(_create())
    except Exception as e:
        logger.error("Schema creation failed", extra={"error": str(e)})
        click.echo(click.style(f"Error creating tables: {e}", fg="red"))
        sys.exit(1)

    click.echo(click.style("Tables created.", fg="green"))


def _echo_section(title: str, values: dict) -> None:
    click.echo(f"{title}:")
    click.echo("-" * 40)
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for k, v in value.items():
                click.echo(f"    {k}: {v}")
        else:
            click.echo(f"  {key}: {value}")
    click.echo()


def show_config(logger) -> None:
    """Display loaded configuration. Secrets are never printed."""
    click.echo("Application Configuration:\n")

    try:
        from cloudnotes.backend.core.config import get_app_config

        app_config = get_app_config()

        _echo_section("Application Settings (from YAML)", app_config.application.model_dump())
        _echo_section("Database Settings (from YAML)", app_config.database.model_dump())
        _echo_section("Logging Settings (from YAML)", app_config.logging.model_dump())
        _echo_section("Security Settings (from YAML)", app_config.security.model_dump())
        _echo_section("Feature Flags (from YAML)", app_config.features.model_dump())

        logger.info("Configuration displayed successfully")

    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from cloudnotes import __version__

    click.echo("CloudNotes")
    click.echo("=" * 40)
    click.echo(f"Version: {__version__}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action initdb   Create database tables")
    click.echo("  --action config   Display configuration")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
