"""Pytest plugin running asyncio-marked tests without pytest-asyncio, plus shared fakes."""

from __future__ import annotations

import asyncio
import inspect

import httpx
import pytest

from src.payment_callback.services.order_finalizer import OrderFinalizer


@pytest.hookimpl
def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - pytest hook
    config.addinivalue_line(
        "markers",
        "asyncio: mark test to run inside an event loop",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool:  # pragma: no cover - pytest hook
    if "asyncio" not in pyfuncitem.keywords:
        return False

    test_function = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_function):
        return False

    loop = asyncio.new_event_loop()
    try:
        argnames = pyfuncitem._fixtureinfo.argnames
        kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
        loop.run_until_complete(test_function(**kwargs))
    finally:
        loop.close()
    return True


class RecordingCartStore:
    """CartStore that only counts clears."""

    def __init__(self, fail: bool = False) -> None:
        self.cleared: list[str] = []
        self.fail = fail

    async def clear(self, cart_id: str) -> bool:
        if self.fail:
            raise ConnectionError("cart backend down")
        self.cleared.append(cart_id)
        return True


class OrderServiceStub:
    """Order-service double answering every finalize with a fixed status."""

    def __init__(self, status_code: int = 200, error: Exception | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"status": "00", "message": "OK", "data": None})

    def finalizer(self) -> OrderFinalizer:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            base_url="http://order-service.test",
        )
        return OrderFinalizer(base_url="http://order-service.test", client=client)


def _vnpay_params(**overrides: str) -> dict[str, str]:
    """Query parameters of a successful VNPay return for order 1001 / 500.000 VND."""
    params = {
        "vnp_Amount": "50000000",
        "vnp_BankCode": "NCB",
        "vnp_OrderInfo": "Thanh toan don hang 1001",
        "vnp_PayDate": "20261017103000",
        "vnp_ResponseCode": "00",
        "vnp_TmnCode": "FINOTEST",
        "vnp_TransactionNo": "TX1",
        "vnp_TransactionStatus": "00",
        "vnp_TxnRef": "1001",
    }
    params.update(overrides)
    return {key: value for key, value in params.items() if value is not None}


@pytest.fixture
def cart_store() -> RecordingCartStore:
    return RecordingCartStore()


@pytest.fixture
def order_service() -> OrderServiceStub:
    return OrderServiceStub()


@pytest.fixture
def failing_cart_store() -> RecordingCartStore:
    return RecordingCartStore(fail=True)


@pytest.fixture
def vnpay_params():
    """Builder for VNPay return parameters; pass ``key=None`` to drop a field."""
    return _vnpay_params
