"""Application service: Place Order use case.

Turns a selection of (book, quantity) pairs into a persisted order.
Everything happens inside one unit of work: price lookup, the
conditional stock decrement, the order insert and the cart cleanup
either all commit or all roll back.
"""

from __future__ import annotations

import structlog

from bookstore.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from bookstore.domain.exceptions import InsufficientStockError, UnknownBookError
from bookstore.domain.model.order import FLAT_SHIPPING_FEE, Order, OrderItem, PaymentMethod
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.model.value_objects import Address, Money, Quantity
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, shipping_fee: Money = FLAT_SHIPPING_FEE) -> None:
        self._uow = uow
        self._shipping_fee = shipping_fee

    def handle(
        self,
        user: UserContext | None,
        item_specs: list[OrderItemSpec],
        payment_method: str,
        shipping_address: Address,
        billing_address: Address | None = None,
    ) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Check the caller and the payment method.
        2. Resolve each book and snapshot its effective price; fail on an
           unknown book or a quantity above current stock.
        3. Let the Order aggregate compute totals and validate.
        4. Decrement stock conditionally (re-checked at write time), save
           the order, drop the purchased books from the cart, commit.
        """
        user = require_user(user)
        method = PaymentMethod.from_key(payment_method)

        with self._uow:
            lines: list[OrderItem] = []
            for spec in item_specs:
                book = self._uow.books.get_by_id(spec.book_id)
                if book is None:
                    raise UnknownBookError(spec.book_id)

                quantity = Quantity(spec.quantity)
                if not book.has_stock(quantity.value):
                    logger.info(
                        "order_rejected_insufficient_stock",
                        book_id=book.id,
                        requested=quantity.value,
                        available=book.stock,
                    )
                    raise InsufficientStockError(
                        book.id, book.title, quantity.value, book.stock
                    )

                lines.append(
                    OrderItem(
                        book_id=book.id,
                        title=book.title,
                        quantity=quantity,
                        price=book.effective_price,  # <-- price snapshot
                        cover_image=book.cover_image,
                    )
                )

            order = Order.create(
                user_id=user.user_id,
                payment_method=method,
                items=lines,
                shipping_address=shipping_address,
                billing_address=billing_address,
                shipping_cost=self._shipping_fee,
            )

            # Stock may have moved since the read above; the decrement
            # itself is the authoritative check.
            for line in order.items:
                if not self._uow.books.decrement_stock(line.book_id, line.quantity.value):
                    current = self._uow.books.get_by_id(line.book_id)
                    available = current.stock if current is not None else 0
                    logger.info(
                        "order_rejected_stock_race",
                        book_id=line.book_id,
                        requested=line.quantity.value,
                        available=available,
                    )
                    raise InsufficientStockError(
                        line.book_id, line.title, line.quantity.value, available
                    )

            self._uow.orders.add(order)
            self._uow.carts.delete_for_user(
                user.user_id, {line.book_id for line in order.items}
            )
            self._uow.commit()

        logger.info(
            "order_placed",
            order_id=order.id,
            order_number=order.order_number,
            user_id=user.user_id,
            payment_method=method.value,
            total=str(order.total.amount),
        )
        return order_to_dto(order)
