from typing import Mapping

from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.services.response_codes import UNKNOWN_RESPONSE_CODE, is_success_code

VNP_PREFIX = "vnp_"


def _parse_amount(raw: str | None) -> int | float:
    """VNPay sends amounts in minor units (x100). Anything unparsable counts as 0."""
    if raw is None:
        return 0
    try:
        minor_units = int(raw.strip())
    except (ValueError, AttributeError):
        return 0
    if minor_units % 100 == 0:
        return minor_units // 100
    return minor_units / 100


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_callback_params(params: Mapping[str, str]) -> CallbackPayload:
    """
    Build a CallbackPayload from the query parameters of a VNPay return URL.

    Only ``vnp_*`` keys are read. A missing ``vnp_TxnRef`` yields an empty
    ``order_id`` (routed to the error view), a missing response code falls
    back to the catalog's "other errors" code.

    Args:
        params: Raw query parameters (string values)

    Returns:
        The normalized, immutable payload
    """
    vnp_params = {key: value for key, value in params.items() if key.startswith(VNP_PREFIX)}

    response_code = _clean(vnp_params.get("vnp_ResponseCode")) or UNKNOWN_RESPONSE_CODE
    transaction_status = _clean(vnp_params.get("vnp_TransactionStatus"))

    # A return URL without vnp_TransactionStatus is judged on the response code alone
    is_success = is_success_code(response_code) and transaction_status in (None, "00")

    return CallbackPayload(
        order_id=_clean(vnp_params.get("vnp_TxnRef")) or "",
        amount=_parse_amount(vnp_params.get("vnp_Amount")),
        response_code=response_code,
        transaction_id=_clean(vnp_params.get("vnp_TransactionNo")) or "",
        is_success=is_success,
        transaction_status=transaction_status,
        bank_code=_clean(vnp_params.get("vnp_BankCode")),
        pay_date=_clean(vnp_params.get("vnp_PayDate")),
        vnp_params=vnp_params,
    )
