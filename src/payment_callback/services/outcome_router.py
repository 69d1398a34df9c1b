from urllib.parse import urlencode

from src.payment_callback import callback_logger as logger
from src.payment_callback.errors import NavigationError
from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.schemas.outcome import (
    ErrorOutcome,
    FailedOutcome,
    ReconciliationOutcome,
    SuccessOutcome,
)
from src.payment_callback.services.response_codes import message_for_code
from src.utils.urls import CHECKOUT_URLS

ORDER_NOT_FOUND_MESSAGE = "Không tìm thấy thông tin đơn hàng"
PROCESSING_ERROR_MESSAGE = "Có lỗi xảy ra khi xử lý thanh toán"
PAYMENT_METHOD = "vnpay"


def route(payload: CallbackPayload, finalize_attempted: bool) -> ReconciliationOutcome:
    """
    Decide the buyer-facing outcome of a callback.

    ``finalize_attempted`` is only logged: the gateway's flag is authoritative
    whether or not the order service was reached.
    """
    if not payload.has_order:
        return ErrorOutcome(message=ORDER_NOT_FOUND_MESSAGE)

    if not finalize_attempted:
        logger.debug(f"Routing order_id={payload.order_id} without a finalize attempt")

    if payload.is_success:
        return SuccessOutcome(
            order_id=payload.order_id,
            amount=payload.amount,
            transaction_id=payload.transaction_id,
        )

    return FailedOutcome(
        order_id=payload.order_id,
        message=message_for_code(payload.response_code),
        response_code=payload.response_code,
    )


def format_amount(amount: int | float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def navigation_url(outcome: ReconciliationOutcome) -> str:
    """Terminal view URL, with the outcome's fields as query parameters."""
    if isinstance(outcome, SuccessOutcome):
        query = {
            "orderId": outcome.order_id,
            "amount": format_amount(outcome.amount),
            "transactionId": outcome.transaction_id,
            "paymentMethod": PAYMENT_METHOD,
        }
        return f"{CHECKOUT_URLS.success}?{urlencode(query)}"

    if isinstance(outcome, FailedOutcome):
        query = {
            "orderId": outcome.order_id,
            "message": outcome.message,
            "responseCode": outcome.response_code,
        }
        return f"{CHECKOUT_URLS.fail}?{urlencode(query)}"

    if isinstance(outcome, ErrorOutcome):
        return f"{CHECKOUT_URLS.error}?{urlencode({'message': outcome.message})}"

    raise NavigationError(f"Outcome {outcome.kind.value!r} has no terminal view")


class Navigator:
    """Records the single navigation a reconciliation is allowed to make."""

    def __init__(self) -> None:
        self.target: str | None = None
        self.outcome: ReconciliationOutcome | None = None

    @property
    def navigated(self) -> bool:
        return self.target is not None

    def navigate(self, outcome: ReconciliationOutcome) -> str:
        if self.navigated:
            raise NavigationError(f"Already navigated to {self.target}")
        url = navigation_url(outcome)
        self.target = url
        self.outcome = outcome
        logger.info(f"Navigating to {url}")
        return url
