"""Bookstore FastAPI application factory.

Usage:
    bookstore serve --port 8000
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    EntityNotFoundError,
    PaymentGatewayUnavailableError,
    ValidationError,
)
from bookstore.domain.gateway.payment_gateway import PaymentGateway
from bookstore.domain.repository.unit_of_work import UnitOfWork
from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.api import books, cart, orders, payments
from bookstore.infrastructure.config import Settings
from bookstore.utils.logging import configure_logging

logger = structlog.get_logger(__name__)

API_PREFIX = "/api"

_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (EntityNotFoundError, 404),
    (ValidationError, 400),
    (PaymentGatewayUnavailableError, 501),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, status in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status
    return 400


def create_app(
    settings: Settings | None = None,
    uow_factory: Callable[[], UnitOfWork] | None = None,
    gateway: PaymentGateway | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json)

    if uow_factory is None:
        uow_factory = bootstrap.unit_of_work_factory(bootstrap.engine(settings))

    app = FastAPI(
        title="Bookstore API",
        description="Catalog, cart, orders and VNPay payment confirmation",
    )
    app.state.settings = settings
    app.state.uow_factory = uow_factory
    app.state.gateway = gateway or bootstrap.payment_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.base_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Error mapping
    # -----------------------------------------------------------------------
    @app.exception_handler(DomainException)
    async def domain_error(request: Request, exc: DomainException) -> JSONResponse:
        status = status_code_for(exc)
        logger.info(
            "request_rejected",
            path=request.url.path,
            status=status,
            error=str(exc),
        )
        return JSONResponse(status_code=status, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(books.router, prefix=API_PREFIX)
    app.include_router(cart.router, prefix=API_PREFIX)
    app.include_router(orders.router, prefix=API_PREFIX)
    app.include_router(payments.router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health")
    async def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "bookstore-api",
        }

    return app
