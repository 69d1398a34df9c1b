import os
from dotenv import load_dotenv

load_dotenv()

LOG_DIR = os.getenv("LOG_DIR", "logs")

POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_DB = os.getenv("POSTGRES_DB", "fino_store")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD")
POSTGRES_USER = os.getenv("POSTGRES_USER")

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

CALLBACK_SERVICE_HOST = os.getenv("CALLBACK_SERVICE_HOST", "0.0.0.0")
CALLBACK_SERVICE_PORT = int(os.getenv("CALLBACK_SERVICE_PORT", "3000"))

ORDER_SERVICE_HOST = os.getenv("ORDER_SERVICE_HOST", "0.0.0.0")
ORDER_SERVICE_PORT = int(os.getenv("ORDER_SERVICE_PORT", "5000"))
ORDER_SERVICE_URL = os.getenv("ORDER_SERVICE_URL", "http://localhost:5000")
FINALIZE_TIMEOUT_SECONDS = float(os.getenv("FINALIZE_TIMEOUT_SECONDS", "10"))

# VNPay hash secret; signature checks are skipped when it is empty
VNPAY_HASH_SECRET = os.getenv("VNPAY_HASH_SECRET", "")

CART_COOKIE_NAME = os.getenv("CART_COOKIE_NAME", "cart_id")
