from typing import Any

from fastapi.responses import JSONResponse

from src.utils.status import Status


class ResponseFormat:
    """Envelope shared by the order service and the callback service health endpoint."""

    def __init__(
        self,
        status: Status = Status.SUCCESS,
        message: str = "SUCCESS",
        data: Any = None,
    ) -> None:
        self.status = status
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.data,
        }

    def to_response(self, status_code: int = 200) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=self.to_dict())
