from src.payment_callback.schemas.callback_payload import CallbackPayload
from src.payment_callback.schemas.finalize_result import FinalizeResult
from src.payment_callback.schemas.outcome import (
    ErrorOutcome,
    FailedOutcome,
    OutcomeKind,
    ProcessingOutcome,
    ReconciliationOutcome,
    SuccessOutcome,
)

__all__ = [
    "CallbackPayload",
    "FinalizeResult",
    "OutcomeKind",
    "ProcessingOutcome",
    "SuccessOutcome",
    "FailedOutcome",
    "ErrorOutcome",
    "ReconciliationOutcome",
]
