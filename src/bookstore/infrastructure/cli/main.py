import click

from bookstore.infrastructure.cli.book_commands import (
    book_add,
    book_list,
    book_set_stock,
    book_update_price,
)
from bookstore.infrastructure.cli.db_commands import db_init, serve
from bookstore.infrastructure.config import Settings
from bookstore.utils.logging import configure_logging


@click.group()
def cli() -> None:
    """Bookstore: catalog, orders and payments"""
    settings = Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def book() -> None:
    """Manage the catalog."""


# Register subcommands
db.add_command(db_init)
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_update_price)
book.add_command(book_set_stock)
cli.add_command(serve)
