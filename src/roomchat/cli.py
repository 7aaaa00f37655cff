#!/usr/bin/env python3
"""
Main CLI entry point for the Roomchat backend.
"""

import asyncio
import json
import os
import sys

import click
import uvicorn
from botocore.exceptions import BotoCoreError, ClientError

from roomchat import __version__
from roomchat.config import settings
from roomchat.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="roomchat")
def cli() -> None:
    """Roomchat CLI - run the API server and manage DynamoDB tables."""
    pass


@cli.command()
@click.option(
    "--host",
    default=lambda: settings.api_host,
    show_default="ROOMCHAT_API_HOST or 0.0.0.0",
    help="Host to bind to",
)
@click.option(
    "--port",
    default=lambda: settings.api_port,
    type=int,
    show_default="ROOMCHAT_API_PORT or 8088",
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development (also enabled by ROOMCHAT_API_RELOAD)",
)
@click.option(
    "--workers", default=1, type=int, help="Number of worker processes (default: 1)"
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the Roomchat API server."""
    reload = reload or settings.api_reload
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting Roomchat API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time in each worker
    if log_level == "debug":
        os.environ["ROOMCHAT_DEBUG"] = "true"
        os.environ["ROOMCHAT_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("ROOMCHAT_DEBUG", "false")
        os.environ.setdefault("ROOMCHAT_LOG_LEVEL", log_level)

    if (reload or workers > 1) and os.getenv("ROOMCHAT_STORE_BACKEND", "memory") == "memory":
        logger.warning("The in-memory store is not shared between workers or across reloads")

    try:
        uvicorn.run(
            "roomchat.api.app:app",
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def tables() -> None:
    """Manage the DynamoDB tables backing rooms and messages."""
    pass


def _dynamodb_store():
    from roomchat.store.factory import create_store

    return create_store("dynamodb")


@tables.command("create")
def create_tables_command() -> None:
    """Create the rooms and messages tables (existing tables are kept)."""
    from roomchat.store.tables import create_tables

    configure_logging()

    try:
        created = asyncio.run(create_tables(_dynamodb_store(), settings.messages_by_room_index))
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)

    if created:
        for name in created:
            click.echo(f"✓ Created table: {name}")
    else:
        click.echo("All tables already exist")


@tables.command("delete")
@click.confirmation_option(prompt="This permanently deletes all rooms and messages. Continue?")
def delete_tables_command() -> None:
    """Delete the rooms and messages tables."""
    from roomchat.store.tables import delete_tables

    configure_logging()

    try:
        deleted = asyncio.run(delete_tables(_dynamodb_store()))
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to delete tables", error=str(e))
        click.echo(f"✗ Error deleting tables: {e}", err=True)
        sys.exit(1)

    for name in deleted:
        click.echo(f"✓ Deleted table: {name}")


@tables.command("describe")
def describe_tables_command() -> None:
    """Show status and indexes of the tables."""
    from roomchat.store.tables import describe_tables

    configure_logging()

    try:
        summary = asyncio.run(describe_tables(_dynamodb_store()))
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to describe tables", error=str(e))
        click.echo(f"✗ Error describing tables: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(summary, indent=2, default=str))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
