"""Redis module for carts and order notifications."""

from src.data.redis.connection import RedisConnection, redis_connection
from src.data.redis.cache_keys import CacheKeys
from src.data.redis.cart_ops import CartStore, RedisCartStore, clear_cart
from src.data.redis.notification_publisher import publish_order_confirmation

__all__ = [
    # Connection
    "RedisConnection",
    "redis_connection",
    # Keys
    "CacheKeys",
    # Carts
    "CartStore",
    "RedisCartStore",
    "clear_cart",
    # Notifications
    "publish_order_confirmation",
]
