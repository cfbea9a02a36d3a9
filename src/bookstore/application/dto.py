"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (book id + quantity)."""

    book_id: str
    quantity: int


@dataclass(frozen=True)
class BookDTO:
    id: str
    title: str
    price: Decimal
    sale_price: Decimal | None
    effective_price: Decimal
    stock: int
    cover_image: str | None
    isbn: str | None


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item with its book snapshot."""

    book_id: str
    title: str
    cover_image: str | None
    quantity: int
    price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as shown to its owner."""

    id: str
    order_number: str
    user_id: str
    status: str
    payment_method: str
    payment_status: str
    items: list[OrderItemDTO]
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal
    shipping_address: dict[str, str]
    billing_address: dict[str, str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class CartLineDTO:
    id: str
    book: BookDTO
    quantity: int
    line_total: Decimal
    created_at: datetime


@dataclass(frozen=True)
class CartDTO:
    items: list[CartLineDTO]
    total: Decimal
    count: int


# --- Mapping ------------------------------------------------------------------


def book_to_dto(book: Book) -> BookDTO:
    return BookDTO(
        id=book.id,
        title=book.title,
        price=book.price.amount,
        sale_price=book.sale_price.amount if book.sale_price is not None else None,
        effective_price=book.effective_price.amount,
        stock=book.stock,
        cover_image=book.cover_image,
        isbn=book.isbn,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
        items=[
            OrderItemDTO(
                book_id=item.book_id,
                title=item.title,
                cover_image=item.cover_image,
                quantity=item.quantity.value,
                price=item.price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        subtotal=order.subtotal.amount,
        shipping_cost=order.shipping_cost.amount,
        tax=order.tax.amount,
        total=order.total.amount,
        shipping_address=order.shipping_address.to_dict(),
        billing_address=order.billing_address.to_dict(),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
