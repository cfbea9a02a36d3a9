"""Abstract repository for CartItem entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from bookstore.domain.model.cart import CartItem


class CartRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> CartItem | None:
        """Return a cart item by its ID, or None."""

    @abstractmethod
    def get_for_book(self, user_id: str, book_id: str) -> CartItem | None:
        """Return the user's cart line for a book, or None."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[CartItem]:
        """Return the user's cart, newest first."""

    @abstractmethod
    def save(self, item: CartItem) -> None:
        """Persist a new or updated cart item."""

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Remove a single cart item."""

    @abstractmethod
    def delete_for_user(self, user_id: str, book_ids: Iterable[str] | None = None) -> int:
        """Remove the user's cart lines, restricted to *book_ids* if given.

        Returns the number of rows removed.
        """
