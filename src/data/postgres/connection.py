from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
import src.config as config
from src.data.models import Base
from src.data.models import db_entity  # noqa: F401  registers tables on Base.metadata
from src.utils.logger import get_current_logger


class PostgresConnection:
    """
    PostgreSQL async connection manager using SQLAlchemy.

    The engine is created on first use so importing the order service does
    not require a reachable database.
    """

    def __init__(self, database: str):
        self.database = database
        self.engine = None
        self.AsyncSessionLocal = None

    def _url(self) -> str:
        user = config.POSTGRES_USER
        password = config.POSTGRES_PASSWORD
        host = config.POSTGRES_HOST
        port = config.POSTGRES_PORT
        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{self.database}"

    def _ensure_engine(self) -> None:
        if self.engine is not None:
            return
        logger = get_current_logger()
        self.engine = create_async_engine(
            self._url(),
            pool_size=20,
            max_overflow=10,
            echo=False,
        )
        self.AsyncSessionLocal = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        logger.info(f"✅ PostgreSQL async engine initialized: {config.POSTGRES_HOST}:{config.POSTGRES_PORT}/{self.database}")

    def get_session(self) -> AsyncSession:
        """
        Get a new async database session.

        Returns:
            SQLAlchemy AsyncSession object
        """
        self._ensure_engine()
        return self.AsyncSessionLocal()

    async def create_tables(self) -> None:
        """Create the order tables if they do not exist yet."""
        self._ensure_engine()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        """Close database engine and cleanup resources."""
        logger = get_current_logger()
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.AsyncSessionLocal = None
        logger.info("✅ PostgreSQL async engine disposed")


db_connection = PostgresConnection(database=config.POSTGRES_DB)
