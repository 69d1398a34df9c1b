"""
Order-side half of the VNPay reconciliation.

Called by the storefront processing route with the parsed callback. Marks
the order paid exactly once, then (only for the call that performed the
transition) publishes the confirmation email request. A repeated finalize
for a paid order is answered with ``already_processed=True`` and has no
side effects. The buyer's cart belongs to the storefront, which clears it
itself.

Every decision is taken on fields rebuilt from the raw ``vnp_*``
parameters, which are the only part of the body the gateway signature
covers.
"""
from typing import Any, Optional

from src.config import VNPAY_HASH_SECRET
from src.data.models.db_entity.order import Order
from src.data.models.enum.payment_status import PaymentStatus
from src.data.postgres.order_ops import get_order_by_code, mark_order_failed, mark_order_paid
from src.data.redis.notification_publisher import publish_order_confirmation
from src.order_service.services.secure_hash import verify_secure_hash
from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.services.callback_parser import parse_callback_params
from src.payment_callback.services.response_codes import is_cancelled_code, message_for_code
from src.utils.logger import get_current_logger

# VND amounts are whole numbers; anything closer than this is the same amount
AMOUNT_TOLERANCE = 1

# Posted fields that must agree with the ones rebuilt from vnp_* params
_SIGNED_FIELDS = ("order_id", "amount", "response_code", "transaction_id", "is_success")


class FinalizeError(Exception):
    """Base class for finalize failures reported back to the storefront."""


class InvalidSignatureError(FinalizeError):
    pass


class PayloadMismatchError(FinalizeError):
    pass


class OrderNotFoundError(FinalizeError):
    pass


class AmountMismatchError(FinalizeError):
    pass


def signed_payload(payload: CallbackPayload, secret: str) -> CallbackPayload:
    """
    Verify the posted callback and return the payload rebuilt from its vnp_* params.

    Without raw params (local setups with no hash secret) the posted fields
    are used as they are.

    Raises:
        InvalidSignatureError: vnp_SecureHash does not match
        PayloadMismatchError: a posted field disagrees with the signed params
    """
    if secret and not verify_secure_hash(payload.vnp_params, secret):
        raise InvalidSignatureError("Invalid VNPay signature")
    if not payload.vnp_params:
        return payload

    signed = parse_callback_params(payload.vnp_params)
    mismatched = [name for name in _SIGNED_FIELDS if getattr(payload, name) != getattr(signed, name)]
    if mismatched:
        raise PayloadMismatchError(f"Posted fields disagree with the VNPay parameters: {', '.join(mismatched)}")
    return signed


def check_amount(order: Order, payload: CallbackPayload) -> None:
    """Raise AmountMismatchError unless the paid amount equals the order total."""
    if abs(float(order.final_total) - float(payload.amount)) >= AMOUNT_TOLERANCE:
        raise AmountMismatchError(f"Paid amount {payload.amount} does not match order total {order.final_total}")


async def record_failure(order: Order, payload: CallbackPayload) -> bool:
    """Mark a still-pending order FAILED (and CANCELLED when the buyer cancelled)."""
    return await mark_order_failed(
        order.order_code,
        payload.response_code,
        cancelled=is_cancelled_code(payload.response_code),
    )


async def complete_payment(order: Order, payload: CallbackPayload) -> bool:
    """
    Mark the order paid and request the confirmation email.

    Returns:
        True if this call performed the transition; False if the order was
        already paid, in which case nothing is published
    """
    logger = get_current_logger()
    transitioned = await mark_order_paid(
        order.order_code,
        transaction_no=payload.transaction_id or None,
        bank_code=payload.bank_code,
        pay_date=payload.pay_date,
        response_code=payload.response_code,
    )
    if not transitioned:
        return False

    order_data = order.to_dict()
    order_data.update(
        payment_status=PaymentStatus.PAID.value,
        transaction_no=payload.transaction_id,
        user_email=order.user_email,
    )
    # A failed publish is logged by the publisher and never undoes the payment
    if order.user_email:
        await publish_order_confirmation(order_data)

    logger.info(f"Order payment completed successfully: {order.order_code}")
    return True


async def finalize_vnpay_payment(payload: CallbackPayload, secret: Optional[str] = None) -> dict[str, Any]:
    """
    Apply a gateway result to the stored order.

    Args:
        payload: Parsed callback as posted by the storefront
        secret: VNPay hash secret; defaults to the configured one, empty disables the check

    Returns:
        Summary dict with ``order_code``, ``payment_status``, ``already_processed`` and ``message``

    Raises:
        InvalidSignatureError: vnp_SecureHash does not match
        PayloadMismatchError: posted fields were altered after signing
        OrderNotFoundError: no order carries this code
        AmountMismatchError: paid amount differs from the order total
    """
    logger = get_current_logger()
    secret = VNPAY_HASH_SECRET if secret is None else secret

    try:
        payload = signed_payload(payload, secret)
    except FinalizeError as e:
        logger.warning(f"Rejected finalize for order_code={payload.order_id!r}: {e}")
        raise

    if not payload.has_order:
        raise OrderNotFoundError("Callback carries no order code")

    order = await get_order_by_code(payload.order_id)
    if order is None:
        raise OrderNotFoundError(f"Order not found with code: {payload.order_id}")

    if not payload.is_success:
        updated = await record_failure(order, payload)
        logger.info(f"Payment failed for order_code={payload.order_id} code={payload.response_code} updated={updated}")
        return {
            "order_code": payload.order_id,
            "payment_status": PaymentStatus.FAILED.value if updated else order.payment_status.value,
            "already_processed": not updated,
            "message": message_for_code(payload.response_code),
        }

    try:
        check_amount(order, payload)
    except AmountMismatchError:
        logger.error(
            f"Amount mismatch for order_code={payload.order_id}: "
            f"order={order.final_total} gateway={payload.amount}"
        )
        raise

    if not await complete_payment(order, payload):
        logger.info(f"Order already paid: {payload.order_id}")
        return {
            "order_code": payload.order_id,
            "payment_status": PaymentStatus.PAID.value,
            "already_processed": True,
            "message": "Order already processed",
        }

    return {
        "order_code": payload.order_id,
        "payment_status": PaymentStatus.PAID.value,
        "already_processed": False,
        "message": "Payment completed successfully",
    }
