"""
Command-line interface for Stock API.

Provides commands for running the server and managing the stocks table.
"""

import sys

import click
import uvicorn
from loguru import logger
from pydantic import ValidationError

from .config import Settings, get_settings
from .db_client import StockDB
from .errors import PersistenceError
from .fastapi_server import create_app
from .logging_setup import setup_logging
from .schema import create_schema


def load_settings(verbose: bool) -> Settings:
    """Load settings and configure logging, exiting if configuration is invalid."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration (is POSTGRES_URL set?): {e}")
        sys.exit(1)

    if verbose:
        # Override log level for verbose mode
        settings.log_level = "DEBUG"

    setup_logging(settings)
    return settings


def connect(settings: Settings) -> StockDB:
    """Build the database client and verify connectivity, exiting on failure."""
    db = StockDB(settings.postgres_url)
    try:
        db.ping()
    except PersistenceError:
        logger.error("Database unreachable, refusing to start")
        sys.exit(1)

    logger.info("Successfully connected to PostgreSQL")
    return db


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Stock API Command Line Interface."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@main.command()
@click.option('--host', default=None, help='Bind address (default: API_HOST setting)')
@click.option('--port', type=int, default=None, help='Port (default: API_PORT setting)')
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Run the HTTP server."""
    settings = load_settings(ctx.obj['verbose'])
    db = connect(settings)

    host = host or settings.api_host
    port = port or settings.api_port

    logger.info(f"Starting server on {host}:{port}...")
    try:
        uvicorn.run(create_app(db), host=host, port=port, log_level=settings.log_level.lower())
    finally:
        db.dispose()


@main.command('init-db')
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the stocks table if it does not exist."""
    settings = load_settings(ctx.obj['verbose'])
    db = connect(settings)

    try:
        create_schema(db.engine)
        logger.success("Schema ready")
    except Exception as e:
        logger.error(f"Schema creation failed: {e}")
        sys.exit(1)
    finally:
        db.dispose()


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show database connectivity and row count."""
    settings = load_settings(ctx.obj['verbose'])
    db = connect(settings)

    try:
        row_count = db.count()
    except PersistenceError as e:
        logger.error(f"Status check failed: {e}")
        sys.exit(1)
    finally:
        db.dispose()

    click.echo("\nStock API Status")
    click.echo("=" * 50)
    click.echo(f"Database:      {db.engine.url.render_as_string(hide_password=True)}")
    click.echo("Connected:     True")
    click.echo(f"Stocks:        {row_count:,}")


if __name__ == '__main__':
    main()
