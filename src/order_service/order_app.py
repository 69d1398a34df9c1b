from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from src.config import ORDER_SERVICE_HOST, ORDER_SERVICE_PORT
from src.data.postgres.connection import db_connection
from src.data.redis.connection import redis_connection
from src.order_service import order_service_logger
from src.order_service.api import finalize_router, ipn_router
from src.utils.logger import set_app_context, AppLogger
from src.utils.response_format import ResponseFormat
from src.utils.urls import ORDER_SERVICE_URLS


class AppContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set app logger context for all requests."""

    async def dispatch(self, request, call_next):
        with set_app_context(AppLogger.ORDER_SERVICE):
            response = await call_next(request)
        return response


@asynccontextmanager
async def lifespan(_: FastAPI):
    order_service_logger.info(f"Order Service starting on {ORDER_SERVICE_HOST}:{ORDER_SERVICE_PORT}")
    await db_connection.create_tables()
    yield
    order_service_logger.info("Order Service shutting down")
    await redis_connection.close()
    await db_connection.close()


app = FastAPI(
    title="Order Service",
    description="Finalizes VNPay payments on storefront orders",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(AppContextMiddleware)

app.include_router(finalize_router)
app.include_router(ipn_router)


@app.get(ORDER_SERVICE_URLS.health)
async def health():
    return ResponseFormat(message="OK").to_response()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=ORDER_SERVICE_HOST, port=ORDER_SERVICE_PORT)
