"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from bookstore.domain.model.value_objects import Money
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.gateway.vnpay import VnpayGateway
from bookstore.infrastructure.persistence.unit_of_work import (
    SqlAlchemyUnitOfWork,
    build_engine,
)


def engine(settings: Settings) -> Engine:
    return build_engine(settings.database_url)


def unit_of_work_factory(bound_engine: Engine) -> Callable[[], UnitOfWork]:
    session_factory = sessionmaker(bind=bound_engine, expire_on_commit=False)
    return lambda: SqlAlchemyUnitOfWork(session_factory)


def unit_of_work(settings: Settings) -> UnitOfWork:
    return unit_of_work_factory(engine(settings))()


def payment_gateway(settings: Settings) -> VnpayGateway:
    return VnpayGateway(
        tmn_code=settings.vnpay_tmn_code,
        hash_secret=settings.vnpay_hash_secret,
        pay_url=settings.vnpay_url,
        return_url=settings.payment_return_url,
    )


def shipping_fee(settings: Settings) -> Money:
    return Money(settings.shipping_fee)
