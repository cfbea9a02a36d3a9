"""Order placement and order history endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bookstore.application.dto import OrderItemSpec
from bookstore.application.list_orders import DEFAULT_PAGE_SIZE, ListOrdersHandler
from bookstore.application.place_order import PlaceOrderHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure.api.dependencies import AppSettings, CurrentUser, UoW
from bookstore.infrastructure.api.schemas import (
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    order_page_response,
    order_response,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201, response_model=OrderResponse)
def place_order(
    body: PlaceOrderRequest, user: CurrentUser, uow: UoW, settings: AppSettings
) -> OrderResponse:
    handler = PlaceOrderHandler(uow, shipping_fee=Money(settings.shipping_fee))
    dto = handler.handle(
        user,
        [OrderItemSpec(i.book_id, i.quantity) for i in body.items],
        body.payment_method,
        body.shipping_address.to_domain(),
        body.billing_address.to_domain() if body.billing_address else None,
    )
    return order_response(dto)


@router.get("", response_model=OrderPageResponse)
def list_orders(
    user: CurrentUser,
    uow: UoW,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    status: str | None = None,
) -> OrderPageResponse:
    dto = ListOrdersHandler(uow).handle(user, page=page, limit=limit, status=status)
    return order_page_response(dto)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, user: CurrentUser, uow: UoW) -> OrderResponse:
    return order_response(ShowOrderHandler(uow).handle(user, order_id))
