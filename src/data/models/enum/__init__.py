from src.data.models.enum.order_status import OrderStatus
from src.data.models.enum.payment_status import PaymentStatus

__all__ = ["OrderStatus", "PaymentStatus"]
