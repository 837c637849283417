"""Logging infrastructure for the RentConnect backend."""

from .context import (
    RequestIdMiddleware,
    TransactionIdFilter,
    get_transaction_id,
    set_transaction_id,
)
from .formatter import StructuredFormatter
from .setup import get_logger, setup_logging, shutdown_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "StructuredFormatter",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
]
