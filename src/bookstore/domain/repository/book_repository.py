"""Abstract repository for Book aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: str) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def list_page(self, offset: int, limit: int) -> list[Book]:
        """Return a slice of the catalog ordered by title."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of books in the catalog."""

    @abstractmethod
    def save(self, book: Book) -> None:
        """Persist a new or updated book."""

    @abstractmethod
    def decrement_stock(self, book_id: str, quantity: int) -> bool:
        """Atomically take *quantity* copies out of stock.

        Succeeds only if the stock at the moment of the write is at least
        *quantity*; otherwise nothing changes and False is returned.
        """
