"""Common schemas and utilities shared across modules."""

from .responses import result_response
from .schemas import BaseResponse

__all__ = [
    "BaseResponse",
    "result_response",
]
