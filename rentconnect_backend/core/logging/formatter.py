"""
Structured JSON log formatting.
"""

import logging
import traceback
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .context import get_transaction_id

JSON_FORMAT = "%(timestamp)s %(level)s %(transaction_id)s %(message)s"
TEXT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(transaction_id)s | "
    "%(name)s:%(lineno)d | %(message)s"
)

# Record attributes that only add noise to the JSON payload
_DROPPED_FIELDS = ("msg", "args", "created", "msecs", "relativeCreated", "pathname")


class StructuredFormatter(JsonFormatter):
    """JSON formatter that adds the fields our log pipeline indexes on."""

    def __init__(
        self,
        *args: Any,
        service_name: str = "rentconnect-backend",
        service_version: str = "0.1.0",
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.service = {"name": service_name, "version": service_version}

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now().astimezone().isoformat()
        log_record["transaction_id"] = getattr(
            record, "transaction_id", None
        ) or get_transaction_id()
        log_record["level"] = record.levelname
        log_record["logger_name"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno
        log_record["service"] = self.service

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        for field in _DROPPED_FIELDS:
            log_record.pop(field, None)


def build_formatter(
    use_json: bool, service_name: str, service_version: str
) -> logging.Formatter:
    if use_json:
        return StructuredFormatter(
            JSON_FORMAT,
            datefmt="%Y-%m-%dT%H:%M:%S",
            service_name=service_name,
            service_version=service_version,
        )
    return logging.Formatter(TEXT_FORMAT)
