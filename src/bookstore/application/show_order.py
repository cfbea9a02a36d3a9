"""Application service: Show Order use case (query)."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO, order_to_dto
from bookstore.domain.exceptions import AuthorizationError, EntityNotFoundError
from bookstore.domain.model.order import Order
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.repository.unit_of_work import UnitOfWork


def load_owned_order(uow: UnitOfWork, user: UserContext, order_id: str) -> Order:
    """Fetch an order for its owner.

    A missing order and somebody else's order are reported differently:
    EntityNotFoundError versus AuthorizationError.
    """
    order = uow.orders.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError("Order not found")
    if not order.is_owned_by(user.user_id):
        raise AuthorizationError("Unauthorized - Order does not belong to user")
    return order


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None, order_id: str) -> OrderDTO:
        user = require_user(user)
        with self._uow:
            order = load_owned_order(self._uow, user, order_id)
        return order_to_dto(order)
