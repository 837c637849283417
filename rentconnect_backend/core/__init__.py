"""Core infrastructure for the RentConnect backend."""

from .exceptions import (
    BusinessRuleError,
    DeliveryError,
    NotFoundError,
    PermissionDeniedError,
    RentConnectException,
    TransactionFailure,
    ValidationError,
)
from .result import Result, ResultStatus, operation_boundary
from .unit_of_work import UnitOfWork

__all__ = [
    "RentConnectException",
    "ValidationError",
    "NotFoundError",
    "BusinessRuleError",
    "PermissionDeniedError",
    "TransactionFailure",
    "DeliveryError",
    "Result",
    "ResultStatus",
    "operation_boundary",
    "UnitOfWork",
]
