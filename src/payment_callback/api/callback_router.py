from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from src.config import CART_COOKIE_NAME
from src.data.redis.cart_ops import CartStore
from src.data.redis.connection import redis_connection
from src.payment_callback import callback_logger
from src.payment_callback.api.dependencies import get_cart_store, get_finalizer
from src.payment_callback.services.order_finalizer import OrderFinalizer
from src.payment_callback.services.reconciliation import ReconciliationController
from src.utils.response_format import ResponseFormat
from src.utils.status import Status
from src.utils.urls import CHECKOUT_URLS

callback_router = APIRouter(tags=["VNPay Callback"])


@callback_router.get(CHECKOUT_URLS.vnpay_callback)
async def vnpay_callback(request: Request):
    """
    VNPay return URL.

    Forwards the buyer to the processing route with every query parameter
    preserved, so the signature fields reach the order service untouched.
    """
    query = request.url.query
    callback_logger.info(f"VNPay return received, forwarding to processing ({len(request.query_params)} params)")

    target = CHECKOUT_URLS.vnpay_processing
    if query:
        target = f"{target}?{query}"
    return RedirectResponse(target, status_code=307)


@callback_router.get(CHECKOUT_URLS.vnpay_processing)
async def vnpay_processing(
    request: Request,
    finalizer: OrderFinalizer = Depends(get_finalizer),
    cart_store: CartStore = Depends(get_cart_store),
):
    """
    Reconcile the gateway result and send the buyer to a terminal view.

    One controller per request: the guard, the navigation and the cart clear
    are scoped to this request only.
    """
    controller = ReconciliationController(finalizer, cart_store)
    cart_id = request.cookies.get(CART_COOKIE_NAME)

    outcome = await controller.run(dict(request.query_params), cart_id=cart_id)
    callback_logger.info(f"Reconciliation finished with outcome={outcome.kind.value}")

    return RedirectResponse(controller.navigator.target, status_code=303)


@callback_router.get(CHECKOUT_URLS.health)
async def health():
    redis_ok = await redis_connection.health_check()
    response = ResponseFormat(
        status=Status.SUCCESS if redis_ok else Status.FAILURE,
        message="OK" if redis_ok else "Redis unavailable",
        data={"redis": redis_ok},
    )
    return response.to_response(200 if redis_ok else 503)
