from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FinalizeResult:
    """What happened to the best-effort order-service sync."""

    attempted: bool
    acknowledged: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def skipped(cls) -> "FinalizeResult":
        return cls(attempted=False)
