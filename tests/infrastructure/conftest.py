"""Shared fixtures for infrastructure tests: in-memory SQLite and an API client."""

import pytest
from fastapi.testclient import TestClient

from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.api.app import create_app
from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.persistence.unit_of_work import build_engine, create_schema
from tests.fakes import TEST_SECRET


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://")
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def uow_factory(engine):
    return bootstrap.unit_of_work_factory(engine)


@pytest.fixture()
def seed_books(uow_factory):
    def _seed(*books: Book) -> None:
        with uow_factory() as uow:
            for book in books:
                uow.books.save(book)
            uow.commit()
    return _seed


@pytest.fixture()
def catalog(seed_books):
    seed_books(
        Book(id="b1", title="Tắt Đèn", price=Money.of("250000"), stock=10),
        Book(id="b2", title="Số Đỏ", price=Money.of("120000"), sale_price=Money.of("99000"), stock=2),
    )


@pytest.fixture()
def settings():
    return Settings(
        database_url="sqlite://",
        base_url="http://shop.test",
        vnpay_tmn_code="TESTTMN1",
        vnpay_hash_secret=TEST_SECRET,
    )


@pytest.fixture()
def client(settings, uow_factory):
    return TestClient(create_app(settings, uow_factory=uow_factory))
