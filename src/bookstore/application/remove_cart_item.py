"""Application service: Remove Cart Item / Clear Cart use cases."""

from __future__ import annotations

from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.repository.unit_of_work import UnitOfWork


class RemoveCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None, item_id: str) -> None:
        user = require_user(user)
        with self._uow:
            item = self._uow.carts.get_by_id(item_id)
            if item is None or item.user_id != user.user_id:
                raise EntityNotFoundError("Cart item not found")
            self._uow.carts.delete(item.id)
            self._uow.commit()


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None) -> int:
        """Empty the caller's cart; returns how many lines were removed."""
        user = require_user(user)
        with self._uow:
            removed = self._uow.carts.delete_for_user(user.user_id)
            self._uow.commit()
        return removed
