"""
One reconciliation of a VNPay return redirect.

A ``ReconciliationController`` lives for exactly one processing request
(the server-side counterpart of a mounted processing page):

1. parse the gateway parameters
2. enter the flow guard synchronously, before anything is awaited
3. post the result to the order service (best effort)
4. stop if the controller was unmounted while waiting
5. clear the cart once on success
6. route to a terminal outcome and navigate exactly once
"""
from typing import Mapping, Optional

from src.data.redis.cart_ops import CartStore
from src.payment_callback import callback_logger as logger
from src.payment_callback.schemas.finalize_result import FinalizeResult
from src.payment_callback.schemas.outcome import ErrorOutcome, ProcessingOutcome, ReconciliationOutcome
from src.payment_callback.services.callback_parser import parse_callback_params
from src.payment_callback.services.idempotency_guard import IdempotencyGuard
from src.payment_callback.services.order_finalizer import OrderFinalizer
from src.payment_callback.services.outcome_router import PROCESSING_ERROR_MESSAGE, Navigator, route


class ReconciliationController:

    def __init__(
        self,
        finalizer: OrderFinalizer,
        cart_store: CartStore,
        *,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self.finalizer = finalizer
        self.cart_store = cart_store
        self.navigator = navigator or Navigator()
        self.flow_guard = IdempotencyGuard("flow")
        self.cart_guard = IdempotencyGuard("cart-clear")
        self.finalize_result: FinalizeResult | None = None
        self._outcome: ReconciliationOutcome = ProcessingOutcome()
        self._alive = True

    @property
    def outcome(self) -> ReconciliationOutcome:
        return self._outcome

    @property
    def is_alive(self) -> bool:
        return self._alive

    def unmount(self) -> None:
        """The buyer left; results of in-flight work are discarded."""
        self._alive = False

    async def run(self, params: Mapping[str, str], cart_id: str | None = None) -> ReconciliationOutcome:
        """
        Reconcile one callback.

        A second call on the same controller does nothing and returns the
        current outcome (``ProcessingOutcome`` while the first call is still
        awaiting the order service).
        """
        if not self.flow_guard.try_enter():
            logger.debug("Duplicate reconciliation invocation ignored")
            return self._outcome

        try:
            payload = parse_callback_params(params)
            logger.info(
                f"Reconciling VNPay callback order_id={payload.order_id!r} "
                f"response_code={payload.response_code} is_success={payload.is_success}"
            )

            self.finalize_result = FinalizeResult.skipped()
            if payload.has_order:
                self.finalize_result = await self.finalizer.finalize(payload)

            if not self._alive:
                logger.info(f"Controller unmounted during finalize of order_id={payload.order_id}, discarding")
                return self._outcome

            if payload.has_order:
                await self.finalizer.clear_cart_once(payload, self.cart_guard, self.cart_store, cart_id)

            if not self._alive:
                logger.info(f"Controller unmounted before navigation for order_id={payload.order_id}")
                return self._outcome

            outcome = route(payload, finalize_attempted=self.finalize_result.attempted)
        except Exception as e:
            logger.exception(f"Unexpected error while reconciling callback: {e}")
            outcome = ErrorOutcome(message=PROCESSING_ERROR_MESSAGE)
        finally:
            self.flow_guard.mark_done()

        if not self._alive:
            return self._outcome

        self._outcome = outcome
        self.navigator.navigate(outcome)
        return outcome
