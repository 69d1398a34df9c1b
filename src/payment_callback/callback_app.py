from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from src.config import CALLBACK_SERVICE_HOST, CALLBACK_SERVICE_PORT, ORDER_SERVICE_URL
from src.data.redis.connection import redis_connection
from src.payment_callback import callback_logger
from src.payment_callback.api import callback_router, checkout_router
from src.payment_callback.services.order_finalizer import OrderFinalizer
from src.utils.logger import set_app_context, AppLogger


class AppContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set app logger context for all requests."""

    async def dispatch(self, request, call_next):
        with set_app_context(AppLogger.PAYMENT_CALLBACK):
            response = await call_next(request)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    callback_logger.info(
        f"Payment Callback Service starting on {CALLBACK_SERVICE_HOST}:{CALLBACK_SERVICE_PORT}, "
        f"order service at {ORDER_SERVICE_URL}"
    )
    app.state.finalizer = OrderFinalizer()
    yield
    callback_logger.info("Payment Callback Service shutting down")
    await app.state.finalizer.aclose()
    await redis_connection.close()


app = FastAPI(
    title="Payment Callback Service",
    description="Reconciles VNPay return redirects and renders the checkout result views",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(AppContextMiddleware)

app.include_router(callback_router)
app.include_router(checkout_router)


if __name__ == "__main__":
    import uvicorn
    callback_logger.info(f"Starting Payment Callback Service on {CALLBACK_SERVICE_HOST}:{CALLBACK_SERVICE_PORT}")
    uvicorn.run(app, host=CALLBACK_SERVICE_HOST, port=CALLBACK_SERVICE_PORT)
