from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CallbackPayload(BaseModel):
    """
    Normalized VNPay return parameters.

    Built once by ``parse_callback_params`` and never mutated. Serialized in
    camelCase (``orderId``, ``responseCode``...) when posted to the order
    service.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    order_id: str = Field(default="", description="Merchant order code (vnp_TxnRef)")
    amount: int | float = Field(default=0, description="Paid amount in VND")
    response_code: str = Field(..., description="Gateway response code (vnp_ResponseCode)")
    transaction_id: str = Field(default="", description="Gateway transaction number (vnp_TransactionNo)")
    is_success: bool = Field(default=False, description="Gateway reported a successful payment")
    transaction_status: Optional[str] = None
    bank_code: Optional[str] = None
    pay_date: Optional[str] = None
    vnp_params: dict[str, str] = Field(default_factory=dict, description="Raw vnp_* parameters, kept for signature checks")

    @property
    def has_order(self) -> bool:
        return bool(self.order_id)

    def to_wire(self) -> dict[str, Any]:
        """JSON body for the order-service finalize endpoint."""
        return self.model_dump(mode="json", by_alias=True)
