"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from bookstore.domain.gateway.payment_gateway import PaymentGateway
from bookstore.domain.model.user import Role, UserContext
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure.config import Settings


def current_user(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> UserContext | None:
    """Identity forwarded by the session layer in front of the API."""
    if not x_user_id:
        return None
    try:
        role = Role((x_user_role or Role.USER.value).upper())
    except ValueError:
        role = Role.USER
    return UserContext(user_id=x_user_id, role=role)


def unit_of_work(request: Request) -> UnitOfWork:
    return request.app.state.uow_factory()


def payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def settings(request: Request) -> Settings:
    return request.app.state.settings


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "127.0.0.1"


CurrentUser = Annotated[UserContext | None, Depends(current_user)]
UoW = Annotated[UnitOfWork, Depends(unit_of_work)]
Gateway = Annotated[PaymentGateway, Depends(payment_gateway)]
AppSettings = Annotated[Settings, Depends(settings)]
ClientIp = Annotated[str, Depends(client_ip)]
