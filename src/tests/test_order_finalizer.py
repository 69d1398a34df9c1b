import json

import httpx
import pytest

from src.payment_callback.services.callback_parser import parse_callback_params
from src.payment_callback.services.idempotency_guard import GuardState, IdempotencyGuard


@pytest.mark.asyncio
async def test_finalize_posts_payload_once(order_service, vnpay_params) -> None:
    finalizer = order_service.finalizer()
    payload = parse_callback_params(vnpay_params())

    result = await finalizer.finalize(payload)

    assert result.attempted is True
    assert result.acknowledged is True
    assert result.status_code == 200
    assert len(order_service.requests) == 1
    request = order_service.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/payment/vnpay/callback"
    body = json.loads(request.content)
    assert body["orderId"] == "1001"
    assert body["isSuccess"] is True


@pytest.mark.asyncio
async def test_finalize_http_500_is_not_raised(order_service, vnpay_params) -> None:
    order_service.status_code = 500
    finalizer = order_service.finalizer()

    result = await finalizer.finalize(parse_callback_params(vnpay_params()))

    assert result.attempted is True
    assert result.acknowledged is False
    assert result.status_code == 500
    assert "500" in result.error
    assert len(order_service.requests) == 1


@pytest.mark.asyncio
async def test_finalize_timeout_is_treated_as_backend_failure(order_service, vnpay_params) -> None:
    order_service.error = httpx.ReadTimeout("too slow")
    finalizer = order_service.finalizer()

    result = await finalizer.finalize(parse_callback_params(vnpay_params()))

    assert result.acknowledged is False
    assert result.status_code is None
    assert "timed out" in result.error
    assert len(order_service.requests) == 1


@pytest.mark.asyncio
async def test_finalize_connection_error_is_treated_as_backend_failure(order_service, vnpay_params) -> None:
    order_service.error = httpx.ConnectError("refused")
    finalizer = order_service.finalizer()

    result = await finalizer.finalize(parse_callback_params(vnpay_params()))

    assert result.acknowledged is False
    assert "request failed" in result.error


@pytest.mark.asyncio
async def test_clear_cart_once_clears_a_single_time(order_service, cart_store, vnpay_params) -> None:
    finalizer = order_service.finalizer()
    payload = parse_callback_params(vnpay_params())
    guard = IdempotencyGuard()

    first = await finalizer.clear_cart_once(payload, guard, cart_store, "cart-1")
    second = await finalizer.clear_cart_once(payload, guard, cart_store, "cart-1")

    assert (first, second) == (True, False)
    assert cart_store.cleared == ["cart-1"]
    assert guard.state is GuardState.DONE


@pytest.mark.asyncio
async def test_clear_cart_once_skips_failed_payments(order_service, cart_store, vnpay_params) -> None:
    finalizer = order_service.finalizer()
    payload = parse_callback_params(vnpay_params(vnp_ResponseCode="24"))
    guard = IdempotencyGuard()

    assert await finalizer.clear_cart_once(payload, guard, cart_store, "cart-1") is False
    assert cart_store.cleared == []
    assert guard.state is GuardState.NOT_STARTED


@pytest.mark.asyncio
async def test_clear_cart_failure_is_logged_not_raised(order_service, failing_cart_store, vnpay_params) -> None:
    finalizer = order_service.finalizer()
    guard = IdempotencyGuard()

    cleared = await finalizer.clear_cart_once(
        parse_callback_params(vnpay_params()), guard, failing_cart_store, "cart-1"
    )

    assert cleared is False
    assert guard.state is GuardState.DONE
