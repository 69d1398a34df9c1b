from src.data.models.db_entity.order import Order

__all__ = ["Order"]
