"""Application service: Add Book use case."""

from __future__ import annotations

import uuid

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork


class AddBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        title: str,
        price: str,
        stock: int = 0,
        sale_price: str | None = None,
        isbn: str | None = None,
        cover_image: str | None = None,
    ) -> Book:
        """Add a new book to the catalog."""
        if not title or not title.strip():
            raise ValidationError("Book title is required")

        list_price = Money.of(price)
        if list_price.amount <= 0:
            raise ValidationError("Book price must be greater than zero")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        book = Book(
            id=str(uuid.uuid4()),
            title=title.strip(),
            price=list_price,
            stock=stock,
            sale_price=Money.of(sale_price) if sale_price else None,
            isbn=isbn,
            cover_image=cover_image,
        )
        with self._uow:
            self._uow.books.save(book)
            self._uow.commit()
        return book
