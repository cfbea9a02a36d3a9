"""Application service: Update Cart Item quantity."""

from __future__ import annotations

from bookstore.application.dto import CartLineDTO, book_to_dto
from bookstore.domain.exceptions import EntityNotFoundError, ValidationError
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.repository.unit_of_work import UnitOfWork


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None, item_id: str, quantity: int) -> CartLineDTO:
        user = require_user(user)
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        with self._uow:
            item = self._uow.carts.get_by_id(item_id)
            # Someone else's line is reported as missing.
            if item is None or item.user_id != user.user_id:
                raise EntityNotFoundError("Cart item not found")

            book = self._uow.books.get_by_id(item.book_id)
            if book is None:
                raise EntityNotFoundError("Book not found")

            item.change_quantity(quantity, book)
            self._uow.carts.save(item)
            self._uow.commit()

        return CartLineDTO(
            id=item.id,
            book=book_to_dto(book),
            quantity=item.quantity,
            line_total=(book.effective_price * item.quantity).amount,
            created_at=item.created_at,
        )
