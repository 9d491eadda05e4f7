"""
Envelope schemas shared by the JSON API.

Used for OpenAPI documentation; handlers build the actual payloads with
``success_response`` / ``error_response``.
"""

from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class SuccessResponseModel(BaseModel, Generic[T]):
    """Generic success envelope."""

    status_code: int = Field(..., description="HTTP status code")
    success: bool = Field(default=True, description="Always true")
    message: str = Field(..., description="Localized success message")
    data: T = Field(..., description="Response data")

    class Config:
        json_schema_extra = {
            "example": {
                "status_code": 200,
                "success": True,
                "message": "Product retrieved successfully",
                "data": {}
            }
        }


class ErrorResponseModel(BaseModel):
    """Error envelope."""

    status_code: int = Field(..., description="HTTP status code")
    status: bool = Field(default=False, description="Always false")
    message: str = Field(..., description="Human readable message")
    detail: Optional[str] = Field(None, description="Machine readable error code")
    errors: Optional[List[Any]] = Field(None, description="Per-field validation failures")

    class Config:
        json_schema_extra = {
            "example": {
                "status_code": 400,
                "status": False,
                "message": "Invalid pagination parameters",
                "detail": "INVALID_PAGINATION",
                "errors": ["pageSize: Input should be less than or equal to 100"]
            }
        }
