"""Exceptions raised inside the VNPay return flow.

Gateway failures and malformed callbacks are not exceptions: they are
ordinary outcomes (``FailedOutcome`` and ``ErrorOutcome``) that end in a view.
"""


class ReconciliationError(Exception):
    """Base class for reconciliation-flow errors."""


class BackendSyncError(ReconciliationError):
    """The order service did not acknowledge a finalize call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NavigationError(ReconciliationError):
    """A reconciliation tried to navigate more than once, or to a non-terminal outcome."""
