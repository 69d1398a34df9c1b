"""
FastAPI dependencies for the reconciliation routes.

The finalizer is created by the app lifespan and stored on ``app.state``;
tests replace these through ``app.dependency_overrides``.
"""
from fastapi import Request

from src.data.redis.cart_ops import CartStore, RedisCartStore
from src.payment_callback.services.order_finalizer import OrderFinalizer


def get_finalizer(request: Request) -> OrderFinalizer:
    finalizer = getattr(request.app.state, "finalizer", None)
    if finalizer is None:
        finalizer = OrderFinalizer()
        request.app.state.finalizer = finalizer
    return finalizer


def get_cart_store() -> CartStore:
    return RedisCartStore()
