"""VNPay endpoints: payment URL creation, IPN callback and browser return."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode

import structlog
from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from bookstore.application.confirm_payment import (
    ConfirmationOutcome,
    ConfirmationResult,
    ConfirmPaymentHandler,
)
from bookstore.application.create_payment import CreatePaymentHandler
from bookstore.domain.model.order import PaymentStatus
from bookstore.infrastructure.api.dependencies import (
    AppSettings,
    ClientIp,
    CurrentUser,
    Gateway,
    UoW,
)
from bookstore.infrastructure.api.schemas import CreatePaymentRequest, PaymentUrlResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/vnpay", tags=["payments"])

IPN_RESPONSES = {
    ConfirmationOutcome.CONFIRMED: ("00", "Confirm Success"),
    ConfirmationOutcome.PAYMENT_FAILED: ("00", "Confirm Success"),
    ConfirmationOutcome.ORDER_NOT_FOUND: ("01", "Order not found"),
    ConfirmationOutcome.ALREADY_CONFIRMED: ("02", "Order already confirmed"),
    ConfirmationOutcome.AMOUNT_INVALID: ("04", "Amount invalid"),
    ConfirmationOutcome.INVALID_SIGNATURE: ("97", "Invalid signature"),
}
UNKNOWN_ERROR = ("99", "Unknown error")

RETURN_MESSAGES = {
    ConfirmationOutcome.ORDER_NOT_FOUND: "Order not found",
    ConfirmationOutcome.AMOUNT_INVALID: "Amount invalid",
    ConfirmationOutcome.INVALID_SIGNATURE: "Invalid signature",
}


@router.post("/create", response_model=PaymentUrlResponse)
def create_payment(
    body: CreatePaymentRequest,
    user: CurrentUser,
    uow: UoW,
    gateway: Gateway,
    ip: ClientIp,
) -> PaymentUrlResponse:
    url = CreatePaymentHandler(uow, gateway).handle(user, body.order_id, ip)
    return PaymentUrlResponse(payment_url=url)


@router.api_route("/ipn", methods=["GET", "POST"])
async def payment_notification(request: Request, uow: UoW, gateway: Gateway) -> dict:
    """Server-to-server notification. Always answers 200 with an RspCode."""
    params = dict(request.query_params)
    try:
        body = await request.body()
        if body:
            params.update(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
        result = await run_in_threadpool(ConfirmPaymentHandler(uow, gateway).handle, params)
    except Exception:
        logger.exception("payment_ipn_failed", txn_ref=params.get("vnp_TxnRef"))
        code, message = UNKNOWN_ERROR
    else:
        code, message = IPN_RESPONSES[result.outcome]
    return {"RspCode": code, "Message": message}


@router.get("/return")
def payment_return(
    request: Request, uow: UoW, gateway: Gateway, settings: AppSettings
) -> RedirectResponse:
    """Where the customer's browser lands after paying; redirects to a result page."""
    params = dict(request.query_params)
    try:
        result = ConfirmPaymentHandler(uow, gateway).handle(params)
    except Exception:
        logger.exception("payment_return_failed", txn_ref=params.get("vnp_TxnRef"))
        return _redirect(settings.base_url, "error", message="Unknown error")
    return _redirect_for(result, settings.base_url)


def _redirect_for(result: ConfirmationResult, base_url: str) -> RedirectResponse:
    if result.outcome in RETURN_MESSAGES:
        return _redirect(base_url, "error", message=RETURN_MESSAGES[result.outcome])
    if result.payment_status is PaymentStatus.PAID:
        return _redirect(base_url, "success", orderNumber=result.order_number)
    return _redirect(base_url, "error", orderNumber=result.order_number)


def _redirect(base_url: str, page: str, **query: str) -> RedirectResponse:
    return RedirectResponse(f"{base_url}/payment/{page}?{urlencode(query)}", status_code=307)
