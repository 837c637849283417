"""Outbound email collaborator."""

from dataclasses import dataclass
from typing import Protocol

from ...core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmailAttachment:
    file_name: str
    content: bytes
    content_type: str = "application/octet-stream"


class Notifier(Protocol):
    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        attachments: list[EmailAttachment] | None = None,
    ) -> bool:
        """Hand a message to the mail transport; False means it was refused."""
        ...


class LoggingNotifier:
    """Notifier that only logs; used when no mail transport is configured."""

    async def send_email(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        attachments: list[EmailAttachment] | None = None,
    ) -> bool:
        logger.info(
            "Email queued",
            extra={
                "to_address": to_address,
                "subject": subject,
                "attachments": len(attachments or []),
            },
        )
        return True
