"""Response envelope shared by every route of the checkout service."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """
    `{success, message, data, errors}` envelope.

    Successful routes wrap their payload in `data`; the exception handlers
    build the failure shape with `error()` so clients branch on `success`
    alone.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Checkout started",
                "data": {"sessionId": "3f1c2d7e9a0b4c6d8e2f1a3b5c7d9e0f"},
                "errors": None,
            }
        }
    )

    success: bool = True
    message: str | None = None
    data: T | None = None
    errors: list[str] | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "APIResponse[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def error(
        cls, message: str, errors: list[str] | None = None
    ) -> "APIResponse[None]":
        """Failure envelope; `data` is always null."""
        return APIResponse[None](success=False, message=message, errors=errors)
