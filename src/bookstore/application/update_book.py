"""Application services: Update Book Price and Set Stock use cases."""

from __future__ import annotations

from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork


class UpdateBookPriceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: str, new_price: str, sale_price: str | None = None) -> Book:
        """Update a book's list price and sale price.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        with self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

            book.update_price(
                Money.of(new_price),
                Money.of(sale_price) if sale_price else None,
            )
            self._uow.books.save(book)
            self._uow.commit()
        return book


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: str, quantity: int) -> Book:
        """Set the number of copies available for sale."""
        with self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                raise EntityNotFoundError(f"Book with ID '{book_id}' not found")

            book.set_stock(quantity)
            self._uow.books.save(book)
            self._uow.commit()
        return book
