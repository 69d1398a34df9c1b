"""PostgreSQL module for order storage."""

from src.data.postgres.connection import PostgresConnection, db_connection
from src.data.postgres.order_ops import get_order_by_code, mark_order_paid, mark_order_failed

__all__ = [
    "PostgresConnection",
    "db_connection",
    "get_order_by_code",
    "mark_order_paid",
    "mark_order_failed",
]
