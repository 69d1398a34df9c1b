from src.order_service.api.finalize_router import router as finalize_router
from src.order_service.api.ipn_router import router as ipn_router

__all__ = ["finalize_router", "ipn_router"]
