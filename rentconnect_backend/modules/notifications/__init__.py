"""Notifications module: the Notifier collaborator and email content."""

from .notifier import EmailAttachment, LoggingNotifier, Notifier

__all__ = [
    "EmailAttachment",
    "LoggingNotifier",
    "Notifier",
]
