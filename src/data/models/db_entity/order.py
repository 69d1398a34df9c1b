from sqlalchemy import Column, Integer, String, DateTime, func, DECIMAL, Enum, Index
from src.data.models import Base

from src.data.models.enum.order_status import OrderStatus
from src.data.models.enum.payment_status import PaymentStatus


class Order(Base):
    """Storefront order. order_code is the reference sent to VNPay as vnp_TxnRef."""
    __tablename__ = "order"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_code = Column(String, nullable=False, unique=True)
    user_id = Column(Integer, nullable=True)
    user_email = Column(String, nullable=True)
    cart_id = Column(String, nullable=True)
    final_total = Column(DECIMAL(18, 2), nullable=False)
    currency = Column(String, nullable=False, default="VND")
    status = Column(Enum(OrderStatus, name="order_status_enum"), nullable=False, default=OrderStatus.PENDING)
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status_enum"), nullable=False, default=PaymentStatus.PENDING
    )
    payment_method = Column(String, nullable=False, default="VNPay")
    transaction_no = Column(String, nullable=True)
    bank_code = Column(String, nullable=True)
    pay_date = Column(String, nullable=True)
    response_code = Column(String, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index("idx_order_order_code", "order_code"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "order_code": self.order_code,
            "user_id": self.user_id,
            "final_total": float(self.final_total),
            "currency": self.currency,
            "status": self.status.value,
            "payment_status": self.payment_status.value,
            "payment_method": self.payment_method,
            "transaction_no": self.transaction_no,
            "bank_code": self.bank_code,
            "pay_date": self.pay_date,
            "response_code": self.response_code,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }
