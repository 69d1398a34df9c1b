import datetime
import json
from typing import Any

from src.data.redis.cache_keys import CacheKeys
from src.data.redis.connection import redis_connection
from src.utils.logger import get_current_logger


async def publish_order_confirmation(order: dict[str, Any]) -> bool:
    """
    Publish an order-confirmation request for the mailer.

    Args:
        order: Serialized order (``Order.to_dict()``) plus ``user_email``

    Returns:
        True if published successfully, False otherwise
    """
    logger = get_current_logger()
    try:
        redis_client = await redis_connection.get_client()

        message = {
            "type": "order_confirmation",
            "order_code": order.get("order_code"),
            "user_id": order.get("user_id"),
            "email": order.get("user_email"),
            "final_total": order.get("final_total"),
            "transaction_no": order.get("transaction_no"),
            "timestamp": datetime.datetime.now(datetime.UTC).isoformat()
        }

        await redis_client.publish(CacheKeys.order_notification(), json.dumps(message))

        logger.info(f"Published order confirmation: order_code={message['order_code']}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish order confirmation: {e}")
        return False
