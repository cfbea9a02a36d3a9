"""Application service: Create Payment use case.

Builds the gateway URL a customer is sent to in order to pay for an
existing order online.
"""

from __future__ import annotations

import structlog

from bookstore.application.show_order import load_owned_order
from bookstore.domain.exceptions import PaymentGatewayUnavailableError, ValidationError
from bookstore.domain.gateway.payment_gateway import PaymentGateway
from bookstore.domain.model.user import UserContext, require_user
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreatePaymentHandler:

    def __init__(self, uow: UnitOfWork, gateway: PaymentGateway) -> None:
        self._uow = uow
        self._gateway = gateway

    def handle(self, user: UserContext | None, order_id: str, client_ip: str) -> str:
        user = require_user(user)
        with self._uow:
            order = load_owned_order(self._uow, user, order_id)

        if not self._gateway.is_configured:
            raise PaymentGatewayUnavailableError(
                "Online payment is not available. Please use Cash on Delivery."
            )
        if order.payment_method is not self._gateway.payment_method:
            raise ValidationError(
                f"Order {order.order_number} is not set up for online payment"
            )
        if order.payment_status.is_final:
            raise ValidationError(
                f"Payment for order {order.order_number} already "
                f"{order.payment_status.value}"
            )

        url = self._gateway.build_payment_url(order, client_ip)
        logger.info("payment_url_created", order_number=order.order_number)
        return url
