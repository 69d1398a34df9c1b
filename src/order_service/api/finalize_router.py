from fastapi import APIRouter

from src.order_service import order_service_logger
from src.order_service.services import finalize_service
from src.order_service.services.finalize_service import (
    AmountMismatchError,
    InvalidSignatureError,
    OrderNotFoundError,
    PayloadMismatchError,
)
from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.utils.response_format import ResponseFormat
from src.utils.status import Status
from src.utils.urls import ORDER_SERVICE_URLS

router = APIRouter(tags=["Order Finalization"])


@router.post(ORDER_SERVICE_URLS.vnpay_finalize)
async def vnpay_finalize_endpoint(payload: CallbackPayload):
    """
    Persist a VNPay result on its order.

    Called once per reconciliation by the storefront. Idempotent: a second
    call for a paid order answers 200 with ``already_processed``.
    """
    order_service_logger.info(
        f"Finalize request for order_code={payload.order_id!r} "
        f"response_code={payload.response_code} is_success={payload.is_success}"
    )
    try:
        result = await finalize_service.finalize_vnpay_payment(payload)
        return ResponseFormat(
            status=Status.SUCCESS if payload.is_success else Status.FAILURE,
            message=result["message"],
            data=result,
        ).to_response()
    except InvalidSignatureError as e:
        return ResponseFormat(status=Status.INVALID_SIGNATURE, message=str(e)).to_response(400)
    except PayloadMismatchError as e:
        return ResponseFormat(status=Status.PAYLOAD_MISMATCH, message=str(e)).to_response(400)
    except AmountMismatchError as e:
        return ResponseFormat(status=Status.AMOUNT_MISMATCH, message=str(e)).to_response(400)
    except OrderNotFoundError as e:
        return ResponseFormat(status=Status.ORDER_NOT_FOUND, message=str(e)).to_response(404)
    except Exception as e:
        order_service_logger.exception(f"Finalize failed for order_code={payload.order_id!r}")
        return ResponseFormat(status=Status.UNKNOWN_ERROR, message=str(e)).to_response(500)
