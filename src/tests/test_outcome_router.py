from urllib.parse import parse_qs, urlsplit

import pytest

from src.payment_callback.errors import NavigationError
from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.schemas.outcome import (
    ErrorOutcome,
    FailedOutcome,
    OutcomeKind,
    ProcessingOutcome,
    SuccessOutcome,
)
from src.payment_callback.services.outcome_router import (
    ORDER_NOT_FOUND_MESSAGE,
    Navigator,
    navigation_url,
    route,
)
from src.payment_callback.services.response_codes import RESPONSE_CODE_MESSAGES


def _split(url: str) -> tuple[str, dict[str, str]]:
    parts = urlsplit(url)
    return parts.path, {key: values[0] for key, values in parse_qs(parts.query).items()}


def test_success_payload_routes_to_success():
    payload = CallbackPayload(
        order_id="1001", amount=500000, response_code="00", transaction_id="TX1", is_success=True
    )

    outcome = route(payload, finalize_attempted=True)

    assert outcome == SuccessOutcome(order_id="1001", amount=500000, transaction_id="TX1")


def test_failed_payload_routes_to_failed_with_code_message():
    payload = CallbackPayload(order_id="1001", response_code="24", is_success=False)

    outcome = route(payload, finalize_attempted=True)

    assert isinstance(outcome, FailedOutcome)
    assert outcome.order_id == "1001"
    assert outcome.response_code == "24"
    assert outcome.message == RESPONSE_CODE_MESSAGES["24"]


@pytest.mark.parametrize("is_success", [True, False])
@pytest.mark.parametrize("response_code", ["00", "24", "99", "zz"])
def test_missing_order_id_always_routes_to_error(is_success, response_code):
    payload = CallbackPayload(order_id="", response_code=response_code, is_success=is_success)

    outcome = route(payload, finalize_attempted=False)

    assert outcome == ErrorOutcome(message=ORDER_NOT_FOUND_MESSAGE)


@pytest.mark.parametrize("response_code", ["01", "07", "09", "11", "24", "51", "75", "99", "", "??"])
def test_non_success_codes_never_produce_empty_messages(response_code):
    payload = CallbackPayload(order_id="1001", response_code=response_code, is_success=False)

    outcome = route(payload, finalize_attempted=True)

    assert outcome.kind is OutcomeKind.FAILED
    assert outcome.message


def test_routing_does_not_depend_on_finalize_attempt():
    payload = CallbackPayload(order_id="1001", amount=10, response_code="00", transaction_id="T", is_success=True)

    assert route(payload, finalize_attempted=False) == route(payload, finalize_attempted=True)


def test_success_navigation_url_carries_order_amount_transaction():
    path, query = _split(navigation_url(SuccessOutcome(order_id="1001", amount=500000, transaction_id="TX1")))

    assert path == "/checkout/success"
    assert query == {"orderId": "1001", "amount": "500000", "transactionId": "TX1", "paymentMethod": "vnpay"}


def test_fail_navigation_url_carries_message_and_code():
    outcome = FailedOutcome(order_id="1001", message=RESPONSE_CODE_MESSAGES["24"], response_code="24")

    path, query = _split(navigation_url(outcome))

    assert path == "/checkout/fail"
    assert query == {"orderId": "1001", "message": RESPONSE_CODE_MESSAGES["24"], "responseCode": "24"}


def test_error_navigation_url_carries_message():
    path, query = _split(navigation_url(ErrorOutcome(message=ORDER_NOT_FOUND_MESSAGE)))

    assert path == "/checkout/error"
    assert query == {"message": ORDER_NOT_FOUND_MESSAGE}


def test_processing_has_no_terminal_view():
    with pytest.raises(NavigationError):
        navigation_url(ProcessingOutcome())


def test_navigator_allows_a_single_navigation():
    navigator = Navigator()
    outcome = ErrorOutcome(message=ORDER_NOT_FOUND_MESSAGE)

    navigator.navigate(outcome)

    with pytest.raises(NavigationError):
        navigator.navigate(outcome)
    assert navigator.outcome == outcome
