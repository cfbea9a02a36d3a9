"""CLI commands for the database and the HTTP server."""

from __future__ import annotations

import click
import uvicorn

from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.persistence.unit_of_work import create_schema


@click.command("init")
def db_init() -> None:
    """Create the database tables if they do not exist."""
    settings = Settings.from_env()
    create_schema(bootstrap.engine(settings))
    click.echo(f"Schema ready at {settings.database_url}")


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int) -> None:
    """Run the bookstore API."""
    from bookstore.infrastructure.api.app import create_app

    uvicorn.run(create_app(Settings.from_env()), host=host, port=port)
