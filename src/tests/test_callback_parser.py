import pytest
from pydantic import ValidationError

from src.payment_callback.services.callback_parser import parse_callback_params
from src.payment_callback.services.response_codes import (
    RESPONSE_CODE_MESSAGES,
    UNKNOWN_CODE_MESSAGE,
    is_cancelled_code,
    message_for_code,
)


def test_parse_successful_return(vnpay_params):
    payload = parse_callback_params(vnpay_params())

    assert payload.order_id == "1001"
    assert payload.amount == 500000
    assert isinstance(payload.amount, int)
    assert payload.response_code == "00"
    assert payload.transaction_id == "TX1"
    assert payload.is_success is True
    assert payload.bank_code == "NCB"
    assert payload.pay_date == "20261017103000"


def test_parse_keeps_only_vnp_fields(vnpay_params):
    params = vnpay_params()
    params["utm_source"] = "mail"

    payload = parse_callback_params(params)

    assert "utm_source" not in payload.vnp_params
    assert payload.vnp_params["vnp_TxnRef"] == "1001"


def test_missing_order_id_gives_empty_order(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_TxnRef=None))

    assert payload.order_id == ""
    assert payload.has_order is False


@pytest.mark.parametrize("raw_amount", ["abc", "", "12.5e3", None])
def test_non_numeric_amount_defaults_to_zero(vnpay_params, raw_amount):
    payload = parse_callback_params(vnpay_params(vnp_Amount=raw_amount))

    assert payload.amount == 0


def test_amount_with_fractional_minor_units(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_Amount="12345"))

    assert payload.amount == 123.45


def test_missing_response_code_uses_sentinel(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_ResponseCode=None))

    assert payload.response_code == "99"
    assert payload.is_success is False


def test_failure_code_is_not_success(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_ResponseCode="24", vnp_TransactionStatus="02"))

    assert payload.is_success is False
    assert payload.response_code == "24"


def test_success_code_with_failed_transaction_status_is_not_success(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_TransactionStatus="02"))

    assert payload.is_success is False


def test_success_code_without_transaction_status_is_success(vnpay_params):
    payload = parse_callback_params(vnpay_params(vnp_TransactionStatus=None))

    assert payload.is_success is True


def test_payload_is_immutable(vnpay_params):
    payload = parse_callback_params(vnpay_params())

    with pytest.raises(ValidationError):
        payload.order_id = "2002"


def test_payload_wire_format_is_camel_case(vnpay_params):
    wire = parse_callback_params(vnpay_params()).to_wire()

    assert wire["orderId"] == "1001"
    assert wire["amount"] == 500000
    assert wire["responseCode"] == "00"
    assert wire["transactionId"] == "TX1"
    assert wire["isSuccess"] is True
    assert wire["vnpParams"]["vnp_TxnRef"] == "1001"


def test_every_catalog_code_has_a_message():
    for code in RESPONSE_CODE_MESSAGES:
        assert message_for_code(code)


def test_unknown_code_maps_to_generic_message():
    assert message_for_code("42") == UNKNOWN_CODE_MESSAGE
    assert message_for_code(None) == RESPONSE_CODE_MESSAGES["99"]


def test_cancelled_code():
    assert is_cancelled_code("24") is True
    assert is_cancelled_code("00") is False
