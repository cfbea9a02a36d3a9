"""Tests for the cart use cases."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bookstore.application.add_to_cart import AddToCartHandler
from bookstore.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from bookstore.application.show_cart import ShowCartHandler
from bookstore.application.update_cart_item import UpdateCartItemHandler
from bookstore.domain.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import CartItem
from bookstore.domain.model.user import UserContext
from bookstore.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork

ALICE = UserContext("alice")
BOB = UserContext("bob")


def _uow(carts=None) -> FakeUnitOfWork:
    books = [
        Book(id="b1", title="Truyện Kiều", price=Money.of("150000"), stock=4),
        Book(id="b2", title="Lão Hạc", price=Money.of("90000"), sale_price=Money.of("70000"), stock=10),
    ]
    return FakeUnitOfWork(books=books, carts=carts)


class TestAddToCart:

    def test_new_line(self):
        uow = _uow()
        line = AddToCartHandler(uow).handle(ALICE, "b1", 2)
        assert line.quantity == 2
        assert line.line_total == Decimal("300000")
        assert uow.carts.get_for_book("alice", "b1").quantity == 2

    def test_merges_existing_line(self):
        uow = _uow()
        handler = AddToCartHandler(uow)
        first = handler.handle(ALICE, "b1", 1)
        second = handler.handle(ALICE, "b1", 2)
        assert second.id == first.id
        assert second.quantity == 3
        assert len(uow.carts.list_for_user("alice")) == 1

    def test_merged_quantity_checked_against_stock(self):
        uow = _uow()
        handler = AddToCartHandler(uow)
        handler.handle(ALICE, "b1", 3)
        with pytest.raises(InsufficientStockError):
            handler.handle(ALICE, "b1", 2)
        assert uow.carts.get_for_book("alice", "b1").quantity == 3

    def test_unknown_book(self):
        with pytest.raises(EntityNotFoundError, match="Book not found"):
            AddToCartHandler(_uow()).handle(ALICE, "nope")

    def test_anonymous(self):
        with pytest.raises(AuthenticationError):
            AddToCartHandler(_uow()).handle(None, "b1")


class TestUpdateCartItem:

    def test_update(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        line = UpdateCartItemHandler(uow).handle(ALICE, "c1", 4)
        assert line.quantity == 4

    def test_quantity_below_one(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        with pytest.raises(ValidationError, match="at least 1"):
            UpdateCartItemHandler(uow).handle(ALICE, "c1", 0)

    def test_other_users_line_is_not_found(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        with pytest.raises(EntityNotFoundError, match="Cart item not found"):
            UpdateCartItemHandler(uow).handle(BOB, "c1", 2)

    def test_above_stock(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        with pytest.raises(InsufficientStockError):
            UpdateCartItemHandler(uow).handle(ALICE, "c1", 5)


class TestRemoveAndClear:

    def test_remove(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        RemoveCartItemHandler(uow).handle(ALICE, "c1")
        assert uow.carts.get_by_id("c1") is None

    def test_remove_other_users_line(self):
        uow = _uow([CartItem(id="c1", user_id="alice", book_id="b1", quantity=1)])
        with pytest.raises(EntityNotFoundError):
            RemoveCartItemHandler(uow).handle(BOB, "c1")
        assert uow.carts.get_by_id("c1") is not None

    def test_clear_only_own_cart(self):
        uow = _uow([
            CartItem(id="c1", user_id="alice", book_id="b1", quantity=1),
            CartItem(id="c2", user_id="alice", book_id="b2", quantity=1),
            CartItem(id="c3", user_id="bob", book_id="b1", quantity=1),
        ])
        assert ClearCartHandler(uow).handle(ALICE) == 2
        assert uow.carts.list_for_user("alice") == []
        assert len(uow.carts.list_for_user("bob")) == 1


class TestShowCart:

    def test_totals_use_effective_price(self):
        uow = _uow([
            CartItem(id="c1", user_id="alice", book_id="b1", quantity=2,
                     created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            CartItem(id="c2", user_id="alice", book_id="b2", quantity=3,
                     created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        ])
        cart = ShowCartHandler(uow).handle(ALICE)
        assert cart.total == Decimal("510000")
        assert cart.count == 5
        assert [line.id for line in cart.items] == ["c2", "c1"]

    def test_empty(self):
        cart = ShowCartHandler(_uow()).handle(ALICE)
        assert cart.items == []
        assert cart.total == Decimal("0")
        assert cart.count == 0
