"""VNPay payment gateway adapter.

Parameter sets are signed with HMAC-SHA512 over the form-urlencoded,
key-sorted parameters, excluding the hash fields themselves.
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from bookstore.domain.gateway.payment_gateway import PaymentGateway
from bookstore.domain.model.order import Order, PaymentMethod
from bookstore.domain.model.value_objects import Money

VNPAY_VERSION = "2.1.0"
AMOUNT_SCALE = 100
SUCCESS_CODE = "00"
HASH_FIELDS = ("vnp_SecureHash", "vnp_SecureHashType")

# VNPay expects timestamps in Vietnam local time.
VN_TZ = timezone(timedelta(hours=7))


def canonical_query(params: Mapping[str, str]) -> str:
    """Encode *params* the way VNPay hashes them: sorted keys, spaces as '+'."""
    items = sorted((k, str(v)) for k, v in params.items() if k not in HASH_FIELDS)
    return urlencode(items)


def sign(params: Mapping[str, str], secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"),
        canonical_query(params).encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


class VnpayGateway(PaymentGateway):

    def __init__(
        self,
        tmn_code: str,
        hash_secret: str,
        pay_url: str,
        return_url: str,
    ) -> None:
        self._tmn_code = tmn_code
        self._hash_secret = hash_secret
        self._pay_url = pay_url
        self._return_url = return_url

    @property
    def payment_method(self) -> PaymentMethod:
        return PaymentMethod.VNPAY

    @property
    def is_configured(self) -> bool:
        return bool(self._tmn_code and self._hash_secret)

    def verify_signature(self, params: Mapping[str, str]) -> bool:
        received = params.get("vnp_SecureHash")
        if not received or not self._hash_secret:
            return False
        expected = sign(params, self._hash_secret)
        return hmac.compare_digest(expected.encode("ascii"), received.lower().encode("utf-8"))

    def transaction_ref(self, params: Mapping[str, str]) -> str | None:
        return params.get("vnp_TxnRef") or None

    def notified_amount(self, params: Mapping[str, str]) -> int | None:
        raw = params.get("vnp_Amount", "")
        if not raw.isdigit():
            return None
        return int(raw)

    def to_provider_amount(self, amount: Money) -> int:
        return amount.scaled(AMOUNT_SCALE)

    def is_success(self, params: Mapping[str, str]) -> bool:
        return params.get("vnp_ResponseCode") == SUCCESS_CODE

    def build_payment_url(
        self,
        order: Order,
        client_ip: str,
        now: datetime | None = None,
    ) -> str:
        created = (now or datetime.now(timezone.utc)).astimezone(VN_TZ)
        params = {
            "vnp_Version": VNPAY_VERSION,
            "vnp_Command": "pay",
            "vnp_TmnCode": self._tmn_code,
            "vnp_Amount": str(self.to_provider_amount(order.total)),
            "vnp_CreateDate": created.strftime("%Y%m%d%H%M%S"),
            "vnp_CurrCode": "VND",
            "vnp_IpAddr": client_ip,
            "vnp_Locale": "vn",
            "vnp_OrderInfo": f"Thanh toan don hang {order.order_number}",
            "vnp_OrderType": "other",
            "vnp_ReturnUrl": self._return_url,
            "vnp_TxnRef": order.order_number,
        }
        signature = sign(params, self._hash_secret)
        return f"{self._pay_url}?{canonical_query(params)}&vnp_SecureHash={signature}"
