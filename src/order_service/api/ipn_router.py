import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.order_service import order_service_logger
from src.order_service.services import ipn_service
from src.utils.urls import ORDER_SERVICE_URLS

router = APIRouter(tags=["VNPay IPN"])


async def _ipn_params(request: Request) -> dict[str, str]:
    """VNPay parameters from the query string, plus a JSON object body when one is sent."""
    params = dict(request.query_params)
    body = await request.body()
    if body:
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("IPN body must be a JSON object")
        params.update({key: str(value) for key, value in data.items()})
    return params


@router.api_route(ORDER_SERVICE_URLS.vnpay_ipn, methods=["GET", "POST"])
async def vnpay_ipn_endpoint(request: Request):
    """Gateway-to-server payment confirmation; always answered with HTTP 200."""
    try:
        params = await _ipn_params(request)
    except ValueError as e:
        order_service_logger.warning(f"Unreadable IPN body: {e}")
        return JSONResponse(content=ipn_service.ipn_reply("99", "Invalid request"))

    return JSONResponse(content=await ipn_service.process_vnpay_ipn(params))
