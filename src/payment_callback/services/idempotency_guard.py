import enum
from typing import Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class GuardState(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class IdempotencyGuard:
    """
    Single-use entry gate for one reconciliation.

    Each controller owns its own guard; nothing is shared between requests.
    ``try_enter`` is synchronous and must be called before the first await
    of the work it protects.
    """

    def __init__(self, name: str = "reconciliation") -> None:
        self.name = name
        self._state = GuardState.NOT_STARTED

    @property
    def state(self) -> GuardState:
        return self._state

    def try_enter(self) -> bool:
        """Return True on the first call only."""
        if self._state is not GuardState.NOT_STARTED:
            return False
        self._state = GuardState.IN_PROGRESS
        return True

    def mark_done(self) -> None:
        self._state = GuardState.DONE

    async def run_once(self, action: Callable[[], Awaitable[T]]) -> Optional[T]:
        """Await ``action`` if the guard admits entry, otherwise do nothing and return None."""
        if not self.try_enter():
            return None
        try:
            return await action()
        finally:
            self.mark_done()
