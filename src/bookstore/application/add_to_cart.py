"""Application service: Add To Cart use case.

Adding a book that is already in the cart merges the quantities into
the existing line.  The merged quantity is checked against stock.
"""

from __future__ import annotations

import uuid

from bookstore.application.dto import CartLineDTO, book_to_dto
from bookstore.domain.exceptions import EntityNotFoundError, InsufficientStockError
from bookstore.domain.model.cart import CartItem
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.unit_of_work import UnitOfWork


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None, book_id: str, quantity: int = 1) -> CartLineDTO:
        user = require_user(user)
        requested = Quantity(quantity)

        with self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                raise EntityNotFoundError("Book not found")
            if not book.has_stock(requested.value):
                raise InsufficientStockError(book.id, book.title, requested.value, book.stock)

            item = self._uow.carts.get_for_book(user.user_id, book_id)
            if item is not None:
                item.change_quantity(item.quantity + requested.value, book)
            else:
                item = CartItem(
                    id=str(uuid.uuid4()),
                    user_id=user.user_id,
                    book_id=book_id,
                    quantity=requested.value,
                )
            self._uow.carts.save(item)
            self._uow.commit()

        return CartLineDTO(
            id=item.id,
            book=book_to_dto(book),
            quantity=item.quantity,
            line_total=(book.effective_price * item.quantity).amount,
            created_at=item.created_at,
        )
