"""SQLAlchemy unit of work and engine helpers."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure.persistence.models import Base
from bookstore.infrastructure.persistence.sqlalchemy_repositories import (
    SqlAlchemyBookRepository,
    SqlAlchemyCartRepository,
    SqlAlchemyOrderRepository,
)


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # One connection, otherwise every session would see its own empty database.
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def drop_schema(engine: Engine) -> None:
    Base.metadata.drop_all(engine)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Opens a fresh session for every ``with`` block.

    An instance is not meant to be shared between threads; build one per
    request from a session factory.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.books = SqlAlchemyBookRepository(self._session)
        self.carts = SqlAlchemyCartRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            super().__exit__(*exc_info)
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
