"""Centralised URL definitions for the storefront and order service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutURLs:
    """Storefront routes touched by the VNPay return flow."""

    vnpay_callback: str = "/payment/vnpay/callback"
    vnpay_processing: str = "/payment/vnpay/processing"
    success: str = "/checkout/success"
    fail: str = "/checkout/fail"
    error: str = "/checkout/error"
    retry: str = "/checkout"
    cart: str = "/cart"
    health: str = "/healthz"


@dataclass(frozen=True)
class OrderServiceURLs:
    """Internal order-service routes."""

    vnpay_finalize: str = "/api/payment/vnpay/callback"
    vnpay_ipn: str = "/api/payment/vnpay/ipn"
    health: str = "/healthz"


CHECKOUT_URLS = CheckoutURLs()
ORDER_SERVICE_URLS = OrderServiceURLs()

__all__ = ["CHECKOUT_URLS", "ORDER_SERVICE_URLS", "CheckoutURLs", "OrderServiceURLs"]
