"""Pydantic request/response schemas for the bookstore API.

These are the external JSON contracts (camelCase keys, money as numbers),
kept separate from the application DTOs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookstore.application.dto import (
    BookDTO,
    CartDTO,
    CartLineDTO,
    OrderDTO,
    OrderPageDTO,
)
from bookstore.domain.model.value_objects import Address


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(CamelModel):
    full_name: str
    phone: str
    address: str
    city: str
    email: str = ""
    district: str = ""
    ward: str = ""
    postal_code: str = ""
    notes: str = ""

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class PaginationSchema(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(CamelModel):
    book_id: str
    quantity: int = Field(ge=1)


class PlaceOrderRequest(CamelModel):
    items: list[OrderItemRequest] = Field(min_length=1)
    payment_method: str
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "items": [{"bookId": "b-1", "quantity": 2}],
                    "paymentMethod": "cod",
                    "shippingAddress": {
                        "fullName": "Nguyen Van A",
                        "phone": "0901234567",
                        "address": "12 Ly Thuong Kiet",
                        "city": "Ha Noi",
                    },
                }
            ]
        }
    )


class AddToCartRequest(CamelModel):
    book_id: str
    quantity: int = 1


class UpdateCartItemRequest(CamelModel):
    quantity: int


class CreatePaymentRequest(CamelModel):
    order_id: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class BookResponse(CamelModel):
    id: str
    title: str
    price: float
    sale_price: float | None
    effective_price: float
    stock: int
    cover_image: str | None
    isbn: str | None


class BookPageResponse(CamelModel):
    books: list[BookResponse]
    pagination: PaginationSchema


class OrderItemResponse(CamelModel):
    book_id: str
    title: str
    cover_image: str | None
    quantity: int
    price: float
    line_total: float


class OrderResponse(CamelModel):
    id: str
    order_number: str
    user_id: str
    status: str
    payment_method: str
    payment_status: str
    items: list[OrderItemResponse]
    subtotal: float
    shipping_cost: float
    tax: float
    total: float
    shipping_address: AddressSchema
    billing_address: AddressSchema
    created_at: datetime
    updated_at: datetime


class OrderPageResponse(CamelModel):
    orders: list[OrderResponse]
    pagination: PaginationSchema


class CartLineResponse(CamelModel):
    id: str
    book: BookResponse
    quantity: int
    line_total: float
    created_at: datetime


class CartResponse(CamelModel):
    items: list[CartLineResponse]
    total: float
    count: int


class PaymentUrlResponse(CamelModel):
    payment_url: str


class MessageResponse(CamelModel):
    message: str


# ---------------------------------------------------------------------------
# DTO -> response mapping
# ---------------------------------------------------------------------------
def book_response(dto: BookDTO) -> BookResponse:
    return BookResponse(
        id=dto.id,
        title=dto.title,
        price=float(dto.price),
        sale_price=float(dto.sale_price) if dto.sale_price is not None else None,
        effective_price=float(dto.effective_price),
        stock=dto.stock,
        cover_image=dto.cover_image,
        isbn=dto.isbn,
    )


def order_response(dto: OrderDTO) -> OrderResponse:
    return OrderResponse(
        id=dto.id,
        order_number=dto.order_number,
        user_id=dto.user_id,
        status=dto.status,
        payment_method=dto.payment_method,
        payment_status=dto.payment_status,
        items=[
            OrderItemResponse(
                book_id=i.book_id,
                title=i.title,
                cover_image=i.cover_image,
                quantity=i.quantity,
                price=float(i.price),
                line_total=float(i.line_total),
            )
            for i in dto.items
        ],
        subtotal=float(dto.subtotal),
        shipping_cost=float(dto.shipping_cost),
        tax=float(dto.tax),
        total=float(dto.total),
        shipping_address=AddressSchema(**dto.shipping_address),
        billing_address=AddressSchema(**dto.billing_address),
        created_at=dto.created_at,
        updated_at=dto.updated_at,
    )


def order_page_response(dto: OrderPageDTO) -> OrderPageResponse:
    return OrderPageResponse(
        orders=[order_response(o) for o in dto.orders],
        pagination=PaginationSchema(
            page=dto.page,
            limit=dto.limit,
            total=dto.total,
            total_pages=dto.total_pages,
        ),
    )


def cart_line_response(dto: CartLineDTO) -> CartLineResponse:
    return CartLineResponse(
        id=dto.id,
        book=book_response(dto.book),
        quantity=dto.quantity,
        line_total=float(dto.line_total),
        created_at=dto.created_at,
    )


def cart_response(dto: CartDTO) -> CartResponse:
    return CartResponse(
        items=[cart_line_response(line) for line in dto.items],
        total=float(dto.total),
        count=dto.count,
    )
