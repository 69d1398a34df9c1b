import httpx

from src.config import FINALIZE_TIMEOUT_SECONDS, ORDER_SERVICE_URL
from src.data.redis.cart_ops import CartStore
from src.payment_callback import callback_logger as logger
from src.payment_callback.errors import BackendSyncError
from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.schemas.finalize_result import FinalizeResult
from src.payment_callback.services.idempotency_guard import IdempotencyGuard
from src.utils.urls import ORDER_SERVICE_URLS


class OrderFinalizer:
    """
    Best-effort sync of a gateway result to the order service.

    The gateway's own success flag decides what the buyer sees; this class
    only persists the result (paid status, confirmation email) and never
    raises for backend trouble. One attempt, no retries.
    """

    def __init__(
        self,
        base_url: str = ORDER_SERVICE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = FINALIZE_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url
        if client is None:
            self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

        logger.info("Order finalizer initialised (base_url=%s, timeout=%ss, owns_client=%s)",
                    self._base_url, timeout, self._owns_client)

    async def _post_finalize(self, payload: CallbackPayload) -> int:
        try:
            response = await self._client.post(ORDER_SERVICE_URLS.vnpay_finalize, json=payload.to_wire())
        except httpx.TimeoutException as exc:
            raise BackendSyncError(f"finalize timed out: {exc!r}") from exc
        except httpx.HTTPError as exc:
            raise BackendSyncError(f"finalize request failed: {exc!r}") from exc

        if not response.is_success:
            raise BackendSyncError(
                f"order service answered HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.status_code

    async def finalize(self, payload: CallbackPayload) -> FinalizeResult:
        """
        Post the payload to the order service once.

        Args:
            payload: Parsed gateway callback

        Returns:
            FinalizeResult; ``acknowledged`` is True only for a 2xx answer
        """
        logger.info(f"Finalizing order_id={payload.order_id} is_success={payload.is_success}")
        try:
            status_code = await self._post_finalize(payload)
        except BackendSyncError as exc:
            logger.warning(
                f"Backend sync failed for order_id={payload.order_id}, "
                f"gateway result still stands: {exc}"
            )
            return FinalizeResult(attempted=True, acknowledged=False, status_code=exc.status_code, error=str(exc))

        logger.info(f"Order service acknowledged order_id={payload.order_id} (HTTP {status_code})")
        return FinalizeResult(attempted=True, acknowledged=True, status_code=status_code)

    async def clear_cart_once(
        self,
        payload: CallbackPayload,
        guard: IdempotencyGuard,
        cart_store: CartStore,
        cart_id: str | None,
    ) -> bool:
        """
        Clear the buyer's cart after a successful payment, at most once per guard.

        Returns:
            True if this call cleared the cart
        """
        if not payload.is_success or not cart_id:
            return False

        async def _clear() -> bool:
            try:
                await cart_store.clear(cart_id)
                logger.info(f"Cart '{cart_id}' cleared after payment of order_id={payload.order_id}")
                return True
            except Exception as e:
                logger.error(f"Failed to clear cart '{cart_id}' for order_id={payload.order_id}: {e}")
                return False

        cleared = await guard.run_once(_clear)
        if cleared is None:
            logger.debug(f"Cart clear already done for order_id={payload.order_id}, skipping")
            return False
        return cleared

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
