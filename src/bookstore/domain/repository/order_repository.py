"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order, OrderStatus, PaymentStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order together with its items."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its public order number, or None."""

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        offset: int,
        limit: int,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Return a page of the user's orders, newest first."""

    @abstractmethod
    def count_for_user(self, user_id: str, status: OrderStatus | None = None) -> int:
        """Return how many orders the user has (optionally by status)."""

    @abstractmethod
    def update_payment(self, order: Order, expected: PaymentStatus) -> bool:
        """Write the order's payment status and method.

        The write only happens if the stored payment status still equals
        *expected* (compare-and-set).  Returns False if another writer got
        there first.
        """
