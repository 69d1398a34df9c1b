from src.payment_callback.services.callback_parser import parse_callback_params
from src.payment_callback.services.idempotency_guard import GuardState, IdempotencyGuard
from src.payment_callback.services.order_finalizer import OrderFinalizer
from src.payment_callback.services.outcome_router import Navigator, navigation_url, route
from src.payment_callback.services.reconciliation import ReconciliationController
from src.payment_callback.services.response_codes import message_for_code

__all__ = [
    "parse_callback_params",
    "GuardState",
    "IdempotencyGuard",
    "OrderFinalizer",
    "Navigator",
    "navigation_url",
    "route",
    "ReconciliationController",
    "message_for_code",
]
