"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

import secrets
import string
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from bookstore.domain.exceptions import InvalidPaymentMethodError, ValidationError
from bookstore.domain.model.value_objects import Address, Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"

    @property
    def is_final(self) -> bool:
        return self is not PaymentStatus.PENDING


class PaymentMethod(Enum):
    """Supported payment methods.

    Clients select a method by its short key (``cod``, ``vnpay``); the
    enum value is what gets persisted.
    """

    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"
    VNPAY = "VNPAY"

    @property
    def key(self) -> str:
        return _PAYMENT_METHOD_KEYS[self]

    @staticmethod
    def from_key(key: str) -> PaymentMethod:
        for method, method_key in _PAYMENT_METHOD_KEYS.items():
            if method_key == key:
                return method
        supported = ", ".join(_PAYMENT_METHOD_KEYS.values())
        raise InvalidPaymentMethodError(
            f"Invalid payment method: {key}. Supported methods: {supported}"
        )


_PAYMENT_METHOD_KEYS = {
    PaymentMethod.CASH_ON_DELIVERY: "cod",
    PaymentMethod.VNPAY: "vnpay",
}


@dataclass
class OrderItem:
    """Captures the price snapshot of a book at order-creation time.

    ``title`` and ``cover_image`` are copied too, so order history keeps
    rendering the book as it was sold.
    """

    book_id: str
    title: str
    quantity: Quantity
    price: Money  # locked at order-creation time
    cover_image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
FLAT_SHIPPING_FEE = Money(Decimal("30000"))
MAX_LINE_ITEMS = 50

_ORDER_NUMBER_ALPHABET = string.digits + string.ascii_lowercase


def generate_order_number() -> str:
    """Return an order number such as ``ORD-1718000000000-k3j9x0a1b``.

    The random suffix comes from a CSPRNG because the order number doubles
    as the payment gateway's transaction reference.
    """
    suffix = "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    order_number: str
    user_id: str
    items: list[OrderItem]
    payment_method: PaymentMethod
    shipping_address: Address
    billing_address: Address
    shipping_cost: Money = FLAT_SHIPPING_FEE
    tax: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        payment_method: PaymentMethod,
        items: list[OrderItem],
        shipping_address: Address,
        billing_address: Address | None = None,
        shipping_cost: Money = FLAT_SHIPPING_FEE,
    ) -> Order:
        """Create a new order, enforcing all invariants.

        Tax is always zero under the current business rules.
        """
        if not user_id:
            raise ValidationError("Order must belong to a user")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        return Order(
            id=str(uuid.uuid4()),
            order_number=generate_order_number(),
            user_id=user_id,
            items=list(items),
            payment_method=payment_method,
            shipping_address=shipping_address,
            billing_address=billing_address or shipping_address,
            shipping_cost=shipping_cost,
            tax=Money.zero(shipping_cost.currency),
        )

    # --- Payment state transitions --------------------------------------------

    def mark_paid(self, method: PaymentMethod) -> None:
        """Transition payment PENDING -> PAID, recording how it was paid."""
        self._assert_payment_pending()
        self.payment_status = PaymentStatus.PAID
        self.payment_method = method
        self.updated_at = datetime.now(timezone.utc)

    def mark_payment_failed(self) -> None:
        """Transition payment PENDING -> FAILED."""
        self._assert_payment_pending()
        self.payment_status = PaymentStatus.FAILED
        self.updated_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.shipping_cost.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def total(self) -> Money:
        return self.subtotal + self.shipping_cost + self.tax

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    # --- Internal helpers -----------------------------------------------------

    def _assert_payment_pending(self) -> None:
        if self.payment_status.is_final:
            raise ValidationError(
                f"Payment for order {self.order_number} already "
                f"{self.payment_status.value}"
            )
