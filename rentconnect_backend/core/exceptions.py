"""
Custom exception classes for consistent error handling across all modules.

Each exception carries the HTTP status it maps to, so the application-level
handler and the service result boundary agree on how to surface it.
"""

from typing import Any


class RentConnectException(Exception):
    """Base exception for all RentConnect related errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(RentConnectException):
    """Raised when data validation fails."""

    status_code = 422

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class NotFoundError(RentConnectException):
    """Raised when a referenced tenant, household or property is absent."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class BusinessRuleError(RentConnectException):
    """Raised when a workflow transition is not allowed."""

    pass


class PermissionDeniedError(RentConnectException):
    """Raised when the caller may not act on a landlord's data."""

    status_code = 403

    def __init__(
        self, action: str, resource_type: str, details: dict[str, Any] | None = None
    ):
        message = f"Permission denied: cannot {action} {resource_type}"
        super().__init__(message, details)
        self.action = action
        self.resource_type = resource_type


class TransactionFailure(RentConnectException):
    """Raised when a multi-row write fails and has been rolled back."""

    status_code = 500


class DeliveryError(RentConnectException):
    """Raised when the notifier or document store rejects a request."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ):
        message = f"External service '{service_name}' failed during '{operation}'"
        super().__init__(message, details)
        self.service_name = service_name
        self.operation = operation
