"""Application services: catalog queries."""

from __future__ import annotations

import math

from bookstore.application.dto import BookDTO, book_to_dto
from bookstore.domain.exceptions import EntityNotFoundError, ValidationError
from bookstore.domain.repository.unit_of_work import UnitOfWork


class ListBooksHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, page: int = 1, limit: int = 12) -> tuple[list[BookDTO], int, int]:
        """Return (books, total, total_pages) for one catalog page."""
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be at least 1")
        with self._uow:
            books = self._uow.books.list_page(offset=(page - 1) * limit, limit=limit)
            total = self._uow.books.count()
        return [book_to_dto(b) for b in books], total, math.ceil(total / limit)


class ShowBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: str) -> BookDTO:
        with self._uow:
            book = self._uow.books.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError("Book not found")
        return book_to_dto(book)
