from pathlib import Path

from fastapi import APIRouter, Query
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.templating import Jinja2Templates

from src.payment_callback import callback_logger
from src.payment_callback.services.outcome_router import PROCESSING_ERROR_MESSAGE
from src.payment_callback.services.response_codes import UNKNOWN_RESPONSE_CODE, message_for_code
from src.utils.urls import CHECKOUT_URLS

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
checkout_router = APIRouter(tags=["Checkout Views"])


def format_vnd(amount: str | None) -> str:
    """'500000' -> '500.000 ₫'; unparsable amounts are shown as 0."""
    try:
        value = float(amount) if amount else 0.0
    except ValueError:
        value = 0.0
    return f"{value:,.0f}".replace(",", ".") + " ₫"


@checkout_router.get(CHECKOUT_URLS.success, response_class=HTMLResponse)
async def checkout_success(
    request: Request,
    order_id: str = Query("", alias="orderId"),
    amount: str | None = Query(None),
    transaction_id: str = Query("", alias="transactionId"),
    payment_method: str = Query("", alias="paymentMethod"),
):
    """Payment confirmed by the gateway."""
    callback_logger.info(f"Success view rendered for order_id={order_id}")
    return templates.TemplateResponse(
        request,
        "success.html",
        {
            "order_id": order_id,
            "amount": format_vnd(amount),
            "transaction_id": transaction_id,
            "payment_method": payment_method,
            "orders_url": "/profile?section=orders",
        },
    )


@checkout_router.get(CHECKOUT_URLS.fail, response_class=HTMLResponse)
async def checkout_fail(
    request: Request,
    order_id: str = Query("", alias="orderId"),
    message: str | None = Query(None),
    response_code: str = Query(UNKNOWN_RESPONSE_CODE, alias="responseCode"),
):
    """Gateway refused or the buyer cancelled; offers a fresh checkout attempt."""
    callback_logger.info(f"Fail view rendered for order_id={order_id} response_code={response_code}")
    return templates.TemplateResponse(
        request,
        "fail.html",
        {
            "order_id": order_id,
            "message": message or message_for_code(response_code),
            "response_code": response_code,
            "retry_url": CHECKOUT_URLS.retry,
            "cart_url": CHECKOUT_URLS.cart,
        },
    )


@checkout_router.get(CHECKOUT_URLS.error, response_class=HTMLResponse)
async def checkout_error(request: Request, message: str | None = Query(None)):
    callback_logger.info(f"Error view rendered: {message}")
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "message": message or PROCESSING_ERROR_MESSAGE,
            "cart_url": CHECKOUT_URLS.cart,
        },
    )
