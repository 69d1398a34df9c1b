import logging
from src.utils.logger import setup_logger

order_service_logger = setup_logger(
    "order_service",
    logging.DEBUG,
    log_file="order_service.log"
)

__all__ = ["order_service_logger"]
