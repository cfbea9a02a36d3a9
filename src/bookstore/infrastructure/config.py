"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

VNPAY_SANDBOX_URL = "https://sandbox.vnpayment.vn/paymentv2/vpcpay.html"


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///bookstore.db"
    shipping_fee: Decimal = Decimal("30000")
    base_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    log_json: bool = False
    vnpay_tmn_code: str = ""
    vnpay_hash_secret: str = ""
    vnpay_url: str = VNPAY_SANDBOX_URL
    vnpay_return_url: str = ""

    @property
    def payment_return_url(self) -> str:
        return self.vnpay_return_url or f"{self.base_url}/api/vnpay/return"

    @staticmethod
    def from_env() -> Settings:
        base_url = os.getenv("BOOKSTORE_BASE_URL", Settings.base_url).rstrip("/")
        return Settings(
            database_url=os.getenv("BOOKSTORE_DATABASE_URL", Settings.database_url),
            shipping_fee=Decimal(os.getenv("BOOKSTORE_SHIPPING_FEE", "30000")),
            base_url=base_url,
            log_level=os.getenv("BOOKSTORE_LOG_LEVEL", Settings.log_level),
            log_json=os.getenv("BOOKSTORE_LOG_JSON", "") in ("1", "true", "yes"),
            vnpay_tmn_code=os.getenv("VNPAY_TMN_CODE", ""),
            vnpay_hash_secret=os.getenv("VNPAY_HASH_SECRET", ""),
            vnpay_url=os.getenv("VNPAY_URL", VNPAY_SANDBOX_URL),
            vnpay_return_url=os.getenv("VNPAY_RETURN_URL", ""),
        )
