from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class OutcomeKind(str, Enum):
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)


class ProcessingOutcome(_Outcome):
    """Reconciliation has not produced a result (still running, or discarded)."""
    kind: Literal[OutcomeKind.PROCESSING] = OutcomeKind.PROCESSING


class SuccessOutcome(_Outcome):
    kind: Literal[OutcomeKind.SUCCESS] = OutcomeKind.SUCCESS
    order_id: str
    amount: int | float
    transaction_id: str


class FailedOutcome(_Outcome):
    """The gateway reported a non-success response code."""
    kind: Literal[OutcomeKind.FAILED] = OutcomeKind.FAILED
    order_id: str
    message: str = Field(..., min_length=1)
    response_code: str


class ErrorOutcome(_Outcome):
    """The callback could not be reconciled (no order id, or an unexpected error)."""
    kind: Literal[OutcomeKind.ERROR] = OutcomeKind.ERROR
    message: str = Field(..., min_length=1)


ReconciliationOutcome = Annotated[
    Union[ProcessingOutcome, SuccessOutcome, FailedOutcome, ErrorOutcome],
    Field(discriminator="kind"),
]
