"""Database operations for Order model."""

import datetime

from sqlalchemy import select, update

from src.data.postgres.connection import db_connection
from src.data.models.db_entity.order import Order
from src.data.models.enum.order_status import OrderStatus
from src.data.models.enum.payment_status import PaymentStatus
from src.utils.logger import get_current_logger


async def get_order_by_code(order_code: str) -> Order | None:
    """
    Get an order by the code that was sent to the gateway as vnp_TxnRef.

    Args:
        order_code: Order code to search for

    Returns:
        Order object if found, None otherwise
    """
    logger = get_current_logger()
    session = db_connection.get_session()
    try:
        async with session:
            result = await session.execute(
                select(Order).filter(Order.order_code == order_code)
            )
            return result.scalar_one_or_none()
    except Exception as e:
        logger.error(f"Error getting order by code {order_code}: {e}")
        raise


async def mark_order_paid(
    order_code: str,
    transaction_no: str | None,
    bank_code: str | None,
    pay_date: str | None,
    response_code: str,
) -> bool:
    """
    Move an order to PAID unless it is already paid.

    The status guard lives in the UPDATE itself, so two concurrent finalize
    calls for the same order cannot both win.

    Returns:
        True if this call performed the transition, False if the order was
        already paid (or does not exist)
    """
    logger = get_current_logger()
    session = db_connection.get_session()
    try:
        async with session:
            result = await session.execute(
                update(Order)
                .where(Order.order_code == order_code)
                .where(Order.payment_status != PaymentStatus.PAID)
                .values(
                    status=OrderStatus.PROCESSING,
                    payment_status=PaymentStatus.PAID,
                    transaction_no=transaction_no,
                    bank_code=bank_code,
                    pay_date=pay_date,
                    response_code=response_code,
                    paid_at=datetime.datetime.now(datetime.UTC),
                )
            )
            await session.commit()
            transitioned = result.rowcount == 1
            logger.info(f"mark_order_paid order_code={order_code} transitioned={transitioned}")
            return transitioned
    except Exception as e:
        logger.error(f"Error marking order {order_code} as paid: {e}")
        raise


async def mark_order_failed(order_code: str, response_code: str, cancelled: bool = False) -> bool:
    """
    Record a failed gateway attempt on an order that is still pending payment.

    Args:
        order_code: Order code from the gateway
        response_code: Gateway response code
        cancelled: The buyer cancelled at the gateway; the order itself is cancelled too

    Returns:
        True if the order was updated
    """
    logger = get_current_logger()
    values = {
        "payment_status": PaymentStatus.FAILED,
        "response_code": response_code,
    }
    if cancelled:
        values["status"] = OrderStatus.CANCELLED

    session = db_connection.get_session()
    try:
        async with session:
            result = await session.execute(
                update(Order)
                .where(Order.order_code == order_code)
                .where(Order.payment_status == PaymentStatus.PENDING)
                .values(**values)
            )
            await session.commit()
            return result.rowcount == 1
    except Exception as e:
        logger.error(f"Error marking order {order_code} as failed: {e}")
        raise
