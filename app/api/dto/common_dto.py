"""
Response envelope shared by every endpoint.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class OperationStatus(str, Enum):

    SUCCESS = "success"
    ERROR = "error"


class HttpResponse(BaseModel, Generic[T]):
    """Uniform {status, message, data} response."""

    status: OperationStatus = Field(OperationStatus.SUCCESS, description="Operation status")
    message: str = Field("", description="Response message")
    data: T = Field(..., description="Response payload")


def success_response(message: str = "", data=None) -> HttpResponse:
    """Build a success envelope; `data` defaults to an empty object."""
    return HttpResponse(
        status=OperationStatus.SUCCESS,
        message=message,
        data={} if data is None else data,
    )
