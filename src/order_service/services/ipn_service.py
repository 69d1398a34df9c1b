"""
VNPay IPN (Instant Payment Notification) handling.

The IPN is VNPay's server-to-server confirmation of a payment. It reaches
the order service independently of the buyer's browser, so it records the
result even when the return redirect is never reconciled. It shares the
conditional mark-paid with the finalize endpoint: whichever arrives first
performs the transition and sends the confirmation, the other one sees an
order that is already paid.

VNPay expects HTTP 200 with ``{"RspCode", "Message"}``:

    00  confirmation received
    01  order not found
    02  order already confirmed
    04  invalid amount
    97  invalid signature
    99  unknown error
"""
from typing import Mapping, Optional

from src.config import VNPAY_HASH_SECRET
from src.data.models.enum.payment_status import PaymentStatus
from src.data.postgres.order_ops import get_order_by_code
from src.order_service.services.finalize_service import (
    AmountMismatchError,
    check_amount,
    complete_payment,
    record_failure,
)
from src.order_service.services.secure_hash import verify_secure_hash
from src.payment_callback.services.callback_parser import parse_callback_params
from src.utils.logger import get_current_logger


def ipn_reply(code: str, message: str) -> dict[str, str]:
    return {"RspCode": code, "Message": message}


async def process_vnpay_ipn(params: Mapping[str, str], secret: Optional[str] = None) -> dict[str, str]:
    """
    Apply an IPN to the stored order and build the reply VNPay expects.

    Args:
        params: Raw IPN parameters (the signed vnp_* fields)
        secret: VNPay hash secret; defaults to the configured one, empty disables the check

    Returns:
        ``{"RspCode": ..., "Message": ...}``
    """
    logger = get_current_logger()
    secret = VNPAY_HASH_SECRET if secret is None else secret

    if secret and not verify_secure_hash(params, secret):
        logger.warning(f"Rejected IPN for vnp_TxnRef={params.get('vnp_TxnRef')!r}: invalid signature")
        return ipn_reply("97", "Invalid signature")

    payload = parse_callback_params(params)
    logger.info(
        f"Processing VNPay IPN order_code={payload.order_id!r} "
        f"response_code={payload.response_code} is_success={payload.is_success}"
    )

    try:
        order = await get_order_by_code(payload.order_id) if payload.has_order else None
        if order is None:
            return ipn_reply("01", "Order not found")

        if order.payment_status == PaymentStatus.PAID:
            return ipn_reply("02", "Order already confirmed")

        check_amount(order, payload)

        if not payload.is_success:
            await record_failure(order, payload)
            return ipn_reply("00", "Confirm Received - Payment Failed")

        if not await complete_payment(order, payload):
            return ipn_reply("02", "Order already confirmed")
        return ipn_reply("00", "Confirm Received")

    except AmountMismatchError as e:
        logger.error(f"IPN amount mismatch for order_code={payload.order_id}: {e}")
        return ipn_reply("04", "Invalid amount")
    except Exception as e:
        logger.exception(f"Error processing VNPay IPN for order_code={payload.order_id!r}: {e}")
        return ipn_reply("99", "Unknown error")
