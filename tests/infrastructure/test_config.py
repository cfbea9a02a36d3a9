"""Tests for environment-driven settings."""

from decimal import Decimal

from bookstore.infrastructure.config import VNPAY_SANDBOX_URL, Settings


def test_defaults(monkeypatch):
    for name in ("BOOKSTORE_DATABASE_URL", "BOOKSTORE_BASE_URL", "VNPAY_TMN_CODE", "VNPAY_RETURN_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.database_url == "sqlite:///bookstore.db"
    assert settings.vnpay_url == VNPAY_SANDBOX_URL
    assert settings.payment_return_url == "http://localhost:3000/api/vnpay/return"


def test_overrides(monkeypatch):
    monkeypatch.setenv("BOOKSTORE_BASE_URL", "https://books.example/")
    monkeypatch.setenv("BOOKSTORE_SHIPPING_FEE", "25000")
    monkeypatch.setenv("BOOKSTORE_LOG_JSON", "1")
    monkeypatch.setenv("VNPAY_RETURN_URL", "https://books.example/pay/back")
    settings = Settings.from_env()
    assert settings.base_url == "https://books.example"
    assert settings.shipping_fee == Decimal("25000")
    assert settings.log_json is True
    assert settings.payment_return_url == "https://books.example/pay/back"
