from src.order_service.services.finalize_service import (
    AmountMismatchError,
    FinalizeError,
    InvalidSignatureError,
    OrderNotFoundError,
    finalize_vnpay_payment,
)
from src.order_service.services.secure_hash import build_hash_data, sign_params, verify_secure_hash

__all__ = [
    "finalize_vnpay_payment",
    "FinalizeError",
    "InvalidSignatureError",
    "OrderNotFoundError",
    "AmountMismatchError",
    "build_hash_data",
    "sign_params",
    "verify_secure_hash",
]
