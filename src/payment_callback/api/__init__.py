from src.payment_callback.api.callback_router import callback_router
from src.payment_callback.api.checkout_router import checkout_router

__all__ = ["callback_router", "checkout_router"]
