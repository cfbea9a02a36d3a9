"""Tests for the CreatePayment use case."""

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from bookstore.application.create_payment import CreatePaymentHandler
from bookstore.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EntityNotFoundError,
    PaymentGatewayUnavailableError,
    ValidationError,
)
from bookstore.domain.model.order import Order, OrderItem, PaymentMethod
from bookstore.domain.model.user import UserContext
from bookstore.domain.model.value_objects import Address, Money, Quantity
from tests.fakes import FakeUnitOfWork, make_gateway

ALICE = UserContext("alice")
ADDRESS = Address(full_name="A", phone="1", address="x", city="y")


def _order(method=PaymentMethod.VNPAY) -> Order:
    return Order.create(
        user_id="alice",
        payment_method=method,
        items=[OrderItem("b1", "Book", Quantity(1), Money.of("100000"))],
        shipping_address=ADDRESS,
    )


class TestCreatePayment:

    def test_returns_signed_url(self):
        order = _order()
        handler = CreatePaymentHandler(FakeUnitOfWork(orders=[order]), make_gateway())
        url = handler.handle(ALICE, order.id, "10.0.0.1")

        parts = urlsplit(url)
        query = {k: v[0] for k, v in parse_qs(parts.query).items()}
        assert parts.netloc == "sandbox.vnpayment.vn"
        assert query["vnp_TxnRef"] == order.order_number
        assert query["vnp_Amount"] == "13000000"
        assert query["vnp_IpAddr"] == "10.0.0.1"
        assert make_gateway().verify_signature(query)

    def test_gateway_not_configured(self):
        order = _order()
        handler = CreatePaymentHandler(
            FakeUnitOfWork(orders=[order]), make_gateway(configured=False)
        )
        with pytest.raises(PaymentGatewayUnavailableError, match="Cash on Delivery"):
            handler.handle(ALICE, order.id, "10.0.0.1")

    def test_ownership_checked_before_configuration(self):
        order = _order()
        handler = CreatePaymentHandler(
            FakeUnitOfWork(orders=[order]), make_gateway(configured=False)
        )
        with pytest.raises(AuthorizationError):
            handler.handle(UserContext("mallory"), order.id, "10.0.0.1")

    def test_missing_order(self):
        handler = CreatePaymentHandler(FakeUnitOfWork(), make_gateway())
        with pytest.raises(EntityNotFoundError):
            handler.handle(ALICE, "nope", "10.0.0.1")

    def test_anonymous(self):
        handler = CreatePaymentHandler(FakeUnitOfWork(), make_gateway())
        with pytest.raises(AuthenticationError):
            handler.handle(None, "nope", "10.0.0.1")

    def test_cod_order_rejected(self):
        order = _order(PaymentMethod.CASH_ON_DELIVERY)
        handler = CreatePaymentHandler(FakeUnitOfWork(orders=[order]), make_gateway())
        with pytest.raises(ValidationError, match="not set up for online payment"):
            handler.handle(ALICE, order.id, "10.0.0.1")

    def test_already_paid_rejected(self):
        order = _order()
        order.mark_paid(PaymentMethod.VNPAY)
        handler = CreatePaymentHandler(FakeUnitOfWork(orders=[order]), make_gateway())
        with pytest.raises(ValidationError, match="already PAID"):
            handler.handle(ALICE, order.id, "10.0.0.1")


class TestPaymentUrlDetails:

    def test_create_date_is_vietnam_time(self):
        order = _order()
        url = make_gateway().build_payment_url(
            order, "1.2.3.4", now=datetime(2024, 1, 1, 20, 30, 0, tzinfo=timezone.utc)
        )
        query = parse_qs(urlsplit(url).query)
        assert query["vnp_CreateDate"] == ["20240102033000"]
        assert query["vnp_Version"] == ["2.1.0"]
        assert query["vnp_Command"] == ["pay"]
        assert query["vnp_CurrCode"] == ["VND"]
