from typing import Any, Dict, NoReturn

from fastapi import HTTPException, status

from linkup.core.error_codes import ErrorCode
from linkup.schemas.common import ErrorResponse


class AppException(HTTPException):
    """HTTP error carrying a stable machine code and a message safe to show users."""

    def __init__(
        self,
        *,
        error_code: ErrorCode,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        user_message: str | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(status_code=status_code, detail=user_message or error_code.value)
        self.error_code = error_code
        self.user_message = user_message
        self.details = details

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error_code=self.error_code, user_message=self.user_message, details=self.details)


def raise_error(
    code: ErrorCode,
    status_code: int,
    user_message: str | None = None,
    details: Dict[str, Any] | None = None,
) -> NoReturn:
    raise AppException(error_code=code, status_code=status_code, user_message=user_message, details=details)
