"""Book aggregate.

Books live independently of orders. They have their own lifecycle:
prices change, sales start and end, stock is received and sold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money


@dataclass
class Book:
    """A book in the catalog.

    ``stock`` is the number of copies that can still be sold.  The order
    workflow decrements it through the repository's conditional
    ``decrement_stock`` rather than by mutating this object.
    """

    id: str
    title: str
    price: Money
    stock: int = 0
    sale_price: Money | None = None
    cover_image: str | None = None
    isbn: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def effective_price(self) -> Money:
        """The sale price when it undercuts the list price, else the list price."""
        if self.sale_price is not None and self.sale_price < self.price:
            return self.sale_price
        return self.price

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def update_price(self, new_price: Money, sale_price: Money | None = None) -> None:
        """Change the book price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Book price must be greater than zero")
        self.price = new_price
        self.sale_price = sale_price
        self._touch()

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
