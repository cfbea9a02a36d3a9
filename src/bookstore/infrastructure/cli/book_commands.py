"""CLI commands for the catalog."""

from __future__ import annotations

import click

from bookstore.application.add_book import AddBookHandler
from bookstore.application.show_books import ListBooksHandler
from bookstore.application.update_book import SetStockHandler, UpdateBookPriceHandler
from bookstore.domain.exceptions import DomainException
from bookstore.infrastructure.bootstrap import unit_of_work
from bookstore.infrastructure.config import Settings


@click.command("add")
@click.option("--title", required=True, help="Book title.")
@click.option("--price", required=True, help="List price in VND (e.g. 250000).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--sale-price", default=None, help="Optional discounted price.")
@click.option("--isbn", default=None, help="ISBN.")
@click.option("--cover-image", default=None, help="Cover image URL.")
def book_add(
    title: str,
    price: str,
    stock: int,
    sale_price: str | None,
    isbn: str | None,
    cover_image: str | None,
) -> None:
    """Add a new book to the catalog."""
    handler = AddBookHandler(unit_of_work(Settings.from_env()))

    try:
        book = handler.handle(
            title=title,
            price=price,
            stock=stock,
            sale_price=sale_price,
            isbn=isbn,
            cover_image=cover_image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book.id} '{book.title}' added at {book.price} ({book.stock} in stock)")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=50, show_default=True, type=int)
def book_list(page: int, limit: int) -> None:
    """List the books in the catalog."""
    handler = ListBooksHandler(unit_of_work(Settings.from_env()))

    try:
        books, total, total_pages = handler.handle(page=page, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<38} {'Title':<30} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 89)
    for b in books:
        click.echo(f"{b.id:<38} {b.title[:30]:<30} {b.effective_price:>12,.0f} {b.stock:>6}")
    click.echo(f"Page {page}/{total_pages} ({total} books)")


@click.command("update-price")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--price", required=True, help="New list price.")
@click.option("--sale-price", default=None, help="New sale price; omit to clear it.")
def book_update_price(book_id: str, price: str, sale_price: str | None) -> None:
    """Update a book's price. Existing orders keep the price they were placed at."""
    handler = UpdateBookPriceHandler(unit_of_work(Settings.from_env()))

    try:
        book = handler.handle(book_id=book_id, new_price=price, sale_price=sale_price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Book {book.id} price updated to {book.price}")


@click.command("set-stock")
@click.option("--id", "book_id", required=True, help="Book ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def book_set_stock(book_id: str, quantity: int) -> None:
    """Set the stock level for a book."""
    handler = SetStockHandler(unit_of_work(Settings.from_env()))

    try:
        book = handler.handle(book_id=book_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{book.title}' set to {book.stock}")
