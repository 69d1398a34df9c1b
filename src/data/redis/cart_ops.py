"""Storefront cart storage in Redis (one key per cart)."""

from typing import Protocol

from src.data.redis.cache_keys import CacheKeys
from src.data.redis.connection import redis_connection
from src.utils.logger import get_current_logger


class CartStore(Protocol):
    """What the reconciliation flow needs from a cart backend."""

    async def clear(self, cart_id: str) -> bool: ...


async def clear_cart(cart_id: str) -> bool:
    """
    Delete every item of a cart (async).

    Args:
        cart_id: Storefront cart identifier

    Returns:
        True if a cart was deleted, False if it was already empty or on error
    """
    logger = get_current_logger()
    try:
        redis = await redis_connection.get_client()
        deleted = await redis.delete(CacheKeys.cart(cart_id))
        logger.info(f"Cleared cart '{cart_id}' (existed={deleted > 0})")
        return deleted > 0
    except Exception as e:
        logger.error(f"Failed to clear cart '{cart_id}': {e}")
        return False


class RedisCartStore:
    """CartStore backed by the shared Redis connection."""

    async def clear(self, cart_id: str) -> bool:
        return await clear_cart(cart_id)
