"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from bookstore.application.dto import CartDTO, CartLineDTO, book_to_dto
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user: UserContext | None) -> CartDTO:
        """Return the caller's cart with totals at current effective prices."""
        user = require_user(user)
        lines: list[CartLineDTO] = []
        total = Money.zero()
        count = 0

        with self._uow:
            for item in self._uow.carts.list_for_user(user.user_id):
                book = self._uow.books.get_by_id(item.book_id)
                if book is None:
                    continue
                line_total = book.effective_price * item.quantity
                total = total + line_total
                count += item.quantity
                lines.append(
                    CartLineDTO(
                        id=item.id,
                        book=book_to_dto(book),
                        quantity=item.quantity,
                        line_total=line_total.amount,
                        created_at=item.created_at,
                    )
                )

        return CartDTO(items=lines, total=total.amount, count=count)
