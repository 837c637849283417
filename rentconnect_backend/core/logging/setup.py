"""
Central logging configuration.

Console output always; an optional rotating file is fed through a queue so
request handlers never block on disk I/O.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import TYPE_CHECKING

from .context import TransactionIdFilter
from .formatter import build_formatter

if TYPE_CHECKING:
    from ...config import Settings

ROOT_LOGGER_NAME = "rentconnect_backend"

# Third-party loggers and the level they are capped at
EXTERNAL_LOGGER_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "asyncmy": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "uvicorn": logging.INFO,
    "fastapi": logging.INFO,
}


class LoggingConfig:
    """Owns the handlers installed by setup_logging."""

    def __init__(self):
        self.listener: QueueListener | None = None
        self._is_configured = False

    def setup(
        self,
        log_level: str = "INFO",
        use_json_format: bool = True,
        log_to_file: bool = False,
        log_file_path: str = "logs/app.log",
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
        service_name: str = "rentconnect-backend",
        service_version: str = "0.1.0",
    ) -> logging.Logger:
        if self._is_configured:
            return get_logger()

        level = getattr(logging, log_level.upper(), logging.INFO)
        formatter = build_formatter(use_json_format, service_name, service_version)
        txn_filter = TransactionIdFilter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(txn_filter)
        handlers: list[logging.Handler] = [console_handler]

        if log_to_file:
            directory = os.path.dirname(log_file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file_path, maxBytes=max_bytes, backupCount=backup_count
            )
            file_handler.setFormatter(formatter)

            # The filter must run on the producing thread, where the
            # transaction id context variable is set.
            log_queue: queue.Queue = queue.Queue()
            queue_handler = QueueHandler(log_queue)
            queue_handler.addFilter(txn_filter)
            self.listener = QueueListener(
                log_queue, file_handler, respect_handler_level=True
            )
            self.listener.start()
            handlers.append(queue_handler)

        app_logger = logging.getLogger(ROOT_LOGGER_NAME)
        app_logger.setLevel(level)
        app_logger.handlers = handlers
        app_logger.propagate = False

        for name, ext_level in EXTERNAL_LOGGER_LEVELS.items():
            logging.getLogger(name).setLevel(ext_level)

        self._is_configured = True
        return app_logger

    def shutdown(self) -> None:
        if self.listener:
            self.listener.stop()
            self.listener = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings: "Settings | None" = None) -> logging.Logger:
    """Configure logging from application settings."""
    if settings is None:
        from ...config import settings

    return _logging_config.setup(
        log_level=settings.log_level,
        use_json_format=settings.log_format.lower() == "json",
        log_to_file=settings.log_to_file,
        log_file_path=settings.log_file_path,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        service_name=settings.app_name,
        service_version=settings.app_version,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the application namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    # Module __name__ values already live under the application namespace
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def shutdown_logging() -> None:
    _logging_config.shutdown()
