"""CartItem entity: one (user, book) line in a shopping cart."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import InsufficientStockError, ValidationError
from bookstore.domain.model.book import Book


@dataclass
class CartItem:
    """A book the user intends to buy.

    Invariants:
    - at most one item per (user_id, book_id), enforced by the repository
    - ``quantity`` is at least 1 and, at the time of each mutation, no more
      than the book's stock
    """

    id: str
    user_id: str
    book_id: str
    quantity: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValidationError("Quantity must be at least 1")

    def change_quantity(self, quantity: int, book: Book) -> None:
        """Set a new quantity after checking it against the book's stock."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        if not book.has_stock(quantity):
            raise InsufficientStockError(book.id, book.title, quantity, book.stock)
        self.quantity = quantity
