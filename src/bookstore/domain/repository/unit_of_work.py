"""Unit of Work port.

A unit of work groups repository calls into one atomic transaction.
Use it as a context manager; changes are kept only if ``commit()`` is
called before the block exits, anything else rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):
    books: BookRepository
    carts: CartRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *exc_info) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes. A no-op after ``commit()``."""
