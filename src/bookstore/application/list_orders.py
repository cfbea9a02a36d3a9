"""Application service: List Orders use case (paged query)."""

from __future__ import annotations

import math

from bookstore.application.dto import OrderPageDTO, order_to_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.order import OrderStatus
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.repository.unit_of_work import UnitOfWork

DEFAULT_PAGE_SIZE = 10


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user: UserContext | None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: str | None = None,
    ) -> OrderPageDTO:
        """Return one page of the caller's orders, newest first."""
        user = require_user(user)
        if page < 1:
            raise ValidationError("page must be at least 1")
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        status_filter = None
        if status:
            try:
                status_filter = OrderStatus(status.upper())
            except ValueError as exc:
                raise ValidationError(f"Unknown order status: {status}") from exc

        with self._uow:
            orders = self._uow.orders.list_for_user(
                user.user_id,
                offset=(page - 1) * limit,
                limit=limit,
                status=status_filter,
            )
            total = self._uow.orders.count_for_user(user.user_id, status=status_filter)

        return OrderPageDTO(
            orders=[order_to_dto(o) for o in orders],
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )
