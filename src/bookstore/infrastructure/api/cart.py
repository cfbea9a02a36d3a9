"""Shopping cart endpoints. Every route acts on the caller's own cart."""

from __future__ import annotations

from fastapi import APIRouter

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from bookstore.application.show_cart import ShowCartHandler
from bookstore.application.update_cart_item import UpdateCartItemHandler
from bookstore.infrastructure.api.dependencies import CurrentUser, UoW
from bookstore.infrastructure.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    MessageResponse,
    UpdateCartItemRequest,
    cart_line_response,
    cart_response,
)

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartResponse)
def show_cart(user: CurrentUser, uow: UoW) -> CartResponse:
    return cart_response(ShowCartHandler(uow).handle(user))


@router.post("", status_code=201, response_model=CartLineResponse)
def add_to_cart(body: AddToCartRequest, user: CurrentUser, uow: UoW) -> CartLineResponse:
    line = AddToCartHandler(uow).handle(user, body.book_id, body.quantity)
    return cart_line_response(line)


@router.put("/{item_id}", response_model=CartLineResponse)
def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, user: CurrentUser, uow: UoW
) -> CartLineResponse:
    line = UpdateCartItemHandler(uow).handle(user, item_id, body.quantity)
    return cart_line_response(line)


@router.delete("/{item_id}", response_model=MessageResponse)
def remove_cart_item(item_id: str, user: CurrentUser, uow: UoW) -> MessageResponse:
    RemoveCartItemHandler(uow).handle(user, item_id)
    return MessageResponse(message="Item removed from cart")


@router.delete("", response_model=MessageResponse)
def clear_cart(user: CurrentUser, uow: UoW) -> MessageResponse:
    removed = ClearCartHandler(uow).handle(user)
    return MessageResponse(message=f"Cart cleared ({removed} items removed)")
