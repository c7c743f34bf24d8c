from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from linkup.core.error_codes import ErrorCode


class Message(BaseModel):
    message: str = Field(examples=["Follow request sent."])


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "invalid_credentials",
                "user_message": "Invalid credentials",
                "details": None,
            }
        }
    )

    error_code: ErrorCode = Field(description="Stable machine-readable code")
    user_message: str | None = Field(default=None, description="Human-readable message, safe to display")
    details: Dict[str, Any] | None = Field(default=None, description="Extra context, e.g. retry_after_seconds")
