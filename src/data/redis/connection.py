import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from src.config import REDIS_HOST, REDIS_PORT, REDIS_PASSWORD, REDIS_DB
from src.utils.logger import get_current_logger


class RedisConnection:
    """
    Redis connection manager with async connection pooling.

    Holds the storefront carts and carries order notifications over Pub/Sub.
    """

    def __init__(
        self,
        host: str = REDIS_HOST,
        port: int = REDIS_PORT,
        password: str | None = REDIS_PASSWORD,
        db: int = REDIS_DB,
    ):
        self.host = host
        self.port = port
        self.pool = ConnectionPool(
            host=host,
            port=port,
            password=password if password else None,
            db=db,
            decode_responses=True,
            max_connections=20,
            socket_keepalive=True,
            socket_connect_timeout=5,
            retry_on_timeout=True
        )
        self.client = None

    async def get_client(self) -> redis.Redis:
        """
        Get Redis async client instance, connecting on first use.

        Returns:
            Redis async client object
        """
        if self.client is None:
            logger = get_current_logger()
            self.client = redis.Redis(connection_pool=self.pool)
            await self.client.ping()
            logger.info(f"✅ Redis async client connected: {self.host}:{self.port}")
        return self.client

    async def health_check(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if connection is healthy, False otherwise
        """
        logger = get_current_logger()
        try:
            client = await self.get_client()
            return await client.ping()
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self):
        """Close Redis connection and cleanup resources."""
        logger = get_current_logger()
        if self.client:
            await self.client.aclose()
            self.client = None
        if self.pool:
            await self.pool.aclose()
        logger.info("✅ Redis connection closed")


redis_connection = RedisConnection()
