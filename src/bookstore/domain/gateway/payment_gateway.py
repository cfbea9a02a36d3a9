"""Payment gateway port (abstract interface).

Defines the contract that payment gateway adapters implement, so the
confirmation workflow never depends on a particular provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from bookstore.domain.model.order import Order, PaymentMethod
from bookstore.domain.model.value_objects import Money


class PaymentGateway(ABC):

    @property
    @abstractmethod
    def payment_method(self) -> PaymentMethod:
        """The payment method recorded on orders paid through this gateway."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when merchant credentials are available."""

    @abstractmethod
    def verify_signature(self, params: Mapping[str, str]) -> bool:
        """Check that a callback parameter set was signed by the gateway."""

    @abstractmethod
    def transaction_ref(self, params: Mapping[str, str]) -> str | None:
        """Return the order number the callback refers to."""

    @abstractmethod
    def notified_amount(self, params: Mapping[str, str]) -> int | None:
        """Return the amount from the callback in provider units, or None if unparseable."""

    @abstractmethod
    def to_provider_amount(self, amount: Money) -> int:
        """Express an order amount in the provider's unit convention."""

    @abstractmethod
    def is_success(self, params: Mapping[str, str]) -> bool:
        """True if the callback reports a successful payment."""

    @abstractmethod
    def build_payment_url(self, order: Order, client_ip: str) -> str:
        """Return the URL the customer is redirected to in order to pay."""
