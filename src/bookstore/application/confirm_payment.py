"""Application service: Confirm Payment use case.

Reconciles a payment gateway callback with an order.  Used both by the
server-to-server notification (IPN) and by the browser return URL, so
both channels apply exactly the same checks:

1. signature        -> INVALID_SIGNATURE
2. order lookup     -> ORDER_NOT_FOUND
3. amount           -> AMOUNT_INVALID
4. idempotency      -> ALREADY_CONFIRMED
5. apply outcome    -> CONFIRMED or PAYMENT_FAILED

Steps 1-4 never write.  Step 5 is a compare-and-set on the payment
status, so two concurrent callbacks cannot both apply.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

import structlog

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.gateway.payment_gateway import PaymentGateway
from bookstore.domain.model.order import PaymentStatus
from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ConfirmationOutcome(Enum):
    CONFIRMED = "CONFIRMED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    AMOUNT_INVALID = "AMOUNT_INVALID"
    ALREADY_CONFIRMED = "ALREADY_CONFIRMED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"


@dataclass(frozen=True)
class ConfirmationResult:
    outcome: ConfirmationOutcome
    order_number: str | None = None
    payment_status: PaymentStatus | None = None


class ConfirmPaymentHandler:

    def __init__(self, uow: UnitOfWork, gateway: PaymentGateway) -> None:
        self._uow = uow
        self._gateway = gateway

    def handle(self, params: Mapping[str, str]) -> ConfirmationResult:
        if not self._gateway.verify_signature(params):
            logger.warning(
                "payment_signature_invalid",
                txn_ref=self._gateway.transaction_ref(params),
            )
            return ConfirmationResult(ConfirmationOutcome.INVALID_SIGNATURE)

        order_number = self._gateway.transaction_ref(params)

        with self._uow:
            order = (
                self._uow.orders.get_by_order_number(order_number)
                if order_number
                else None
            )
            if order is None:
                logger.info("payment_order_not_found", order_number=order_number)
                return ConfirmationResult(
                    ConfirmationOutcome.ORDER_NOT_FOUND, order_number
                )

            if not self._amount_matches(params, order.total):
                logger.warning(
                    "payment_amount_invalid",
                    order_number=order_number,
                    notified=self._gateway.notified_amount(params),
                    expected=str(order.total.amount),
                )
                return ConfirmationResult(
                    ConfirmationOutcome.AMOUNT_INVALID,
                    order_number,
                    order.payment_status,
                )

            if order.payment_status.is_final:
                logger.info(
                    "payment_already_processed",
                    order_number=order_number,
                    payment_status=order.payment_status.value,
                )
                return ConfirmationResult(
                    ConfirmationOutcome.ALREADY_CONFIRMED,
                    order_number,
                    order.payment_status,
                )

            if self._gateway.is_success(params):
                order.mark_paid(self._gateway.payment_method)
                outcome = ConfirmationOutcome.CONFIRMED
            else:
                order.mark_payment_failed()
                outcome = ConfirmationOutcome.PAYMENT_FAILED

            if not self._uow.orders.update_payment(order, expected=PaymentStatus.PENDING):
                # A concurrent callback won the compare-and-set.
                current = self._uow.orders.get_by_order_number(order_number)
                return ConfirmationResult(
                    ConfirmationOutcome.ALREADY_CONFIRMED,
                    order_number,
                    current.payment_status if current is not None else None,
                )
            self._uow.commit()

        logger.info(
            "payment_processed",
            order_number=order_number,
            payment_status=order.payment_status.value,
        )
        return ConfirmationResult(outcome, order_number, order.payment_status)

    def _amount_matches(self, params: Mapping[str, str], total: Money) -> bool:
        notified = self._gateway.notified_amount(params)
        if notified is None:
            return False
        try:
            expected = self._gateway.to_provider_amount(total)
        except ValidationError:
            return False
        return notified == expected
