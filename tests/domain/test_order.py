"""Unit tests for the Order aggregate and its business rules."""

import re
from decimal import Decimal

import pytest

from bookstore.domain.exceptions import InvalidPaymentMethodError, ValidationError
from bookstore.domain.model.order import (
    MAX_LINE_ITEMS,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    generate_order_number,
)
from bookstore.domain.model.value_objects import Address, Money, Quantity

ADDRESS = Address(full_name="Nguyen Van A", phone="0901", address="12 Le Loi", city="Hue")


def _make_item(book_id: str = "b1", qty: int = 1, price: str = "250000") -> OrderItem:
    """Helper to build a valid line item."""
    return OrderItem(
        book_id=book_id,
        title=f"Book {book_id}",
        quantity=Quantity(qty),
        price=Money.of(price),
    )


def _make_order(**kwargs) -> Order:
    defaults = dict(
        user_id="u1",
        payment_method=PaymentMethod.VNPAY,
        items=[_make_item(qty=2)],
        shipping_address=ADDRESS,
    )
    defaults.update(kwargs)
    return Order.create(**defaults)


class TestOrderCreation:

    def test_happy_path(self):
        order = _make_order()
        assert order.user_id == "u1"
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.id

    def test_totals(self):
        order = _make_order()
        assert order.subtotal == Money.of("500000")
        assert order.shipping_cost == Money.of("30000")
        assert order.tax == Money.zero()
        assert order.total == Money.of("530000")

    def test_total_is_subtotal_plus_shipping_plus_tax(self):
        order = _make_order(
            items=[_make_item("b1", 3, "99000"), _make_item("b2", 1, "45500")],
            shipping_cost=Money.of("15000"),
        )
        assert order.subtotal == Money.of("342500")
        assert order.total == order.subtotal + order.shipping_cost + order.tax

    def test_billing_defaults_to_shipping(self):
        assert _make_order().billing_address == ADDRESS

    def test_explicit_billing_address_kept(self):
        billing = Address(full_name="Cong ty X", phone="028", address="9 Hai Ba Trung", city="HCM")
        assert _make_order(billing_address=billing).billing_address == billing

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _make_order(items=[])

    def test_too_many_lines_rejected(self):
        items = [_make_item(f"b{i}") for i in range(MAX_LINE_ITEMS + 1)]
        with pytest.raises(ValidationError, match="Maximum"):
            _make_order(items=items)

    def test_missing_user_rejected(self):
        with pytest.raises(ValidationError, match="belong to a user"):
            _make_order(user_id="")

    def test_ids_and_order_numbers_are_unique(self):
        a, b = _make_order(), _make_order()
        assert a.id != b.id
        assert a.order_number != b.order_number


class TestOrderNumber:

    def test_format(self):
        assert re.fullmatch(r"ORD-\d{13}-[0-9a-z]{9}", generate_order_number())

    def test_many_are_distinct(self):
        assert len({generate_order_number() for _ in range(500)}) == 500


class TestPaymentMethod:

    def test_from_key(self):
        assert PaymentMethod.from_key("cod") is PaymentMethod.CASH_ON_DELIVERY
        assert PaymentMethod.from_key("vnpay") is PaymentMethod.VNPAY

    def test_key_round_trip(self):
        for method in PaymentMethod:
            assert PaymentMethod.from_key(method.key) is method

    def test_unknown_key(self):
        with pytest.raises(
            InvalidPaymentMethodError,
            match="Invalid payment method: paypal. Supported methods: cod, vnpay",
        ):
            PaymentMethod.from_key("paypal")


class TestPaymentTransitions:

    def test_mark_paid(self):
        order = _make_order(payment_method=PaymentMethod.CASH_ON_DELIVERY)
        order.mark_paid(PaymentMethod.VNPAY)
        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == PaymentMethod.VNPAY

    def test_mark_failed(self):
        order = _make_order()
        order.mark_payment_failed()
        assert order.payment_status == PaymentStatus.FAILED

    def test_paid_is_terminal(self):
        order = _make_order()
        order.mark_paid(PaymentMethod.VNPAY)
        with pytest.raises(ValidationError, match="already PAID"):
            order.mark_payment_failed()

    def test_failed_is_terminal(self):
        order = _make_order()
        order.mark_payment_failed()
        with pytest.raises(ValidationError, match="already FAILED"):
            order.mark_paid(PaymentMethod.VNPAY)

    def test_order_status_untouched_by_payment(self):
        order = _make_order()
        order.mark_paid(PaymentMethod.VNPAY)
        assert order.status == OrderStatus.PENDING


class TestOrderItem:

    def test_line_total(self):
        assert _make_item(qty=3, price="120000").line_total == Money(Decimal("360000"))

    def test_ownership(self):
        order = _make_order()
        assert order.is_owned_by("u1")
        assert not order.is_owned_by("u2")
