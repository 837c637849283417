"""Document store collaborator.

The core hands bytes to a DocumentStore and keeps only the URL it returns.
"""

import asyncio
import os
import re
import uuid
from typing import Protocol

from ...core.logging import get_logger
from .categories import DocumentCategory
from .owners import DocumentOwner

logger = get_logger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class DocumentStore(Protocol):
    async def store(
        self,
        content: bytes,
        file_name: str,
        owner: DocumentOwner,
        category: DocumentCategory,
    ) -> str:
        """Persist ``content`` and return a stable URL for it."""
        ...


class LocalDocumentStore:
    """Stores files on local disk below ``root`` and serves them from ``base_url``."""

    def __init__(self, root: str, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    async def store(
        self,
        content: bytes,
        file_name: str,
        owner: DocumentOwner,
        category: DocumentCategory,
    ) -> str:
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", os.path.basename(file_name))
        relative = "/".join(
            [
                owner.owner_type.value,
                str(owner.id),
                category.value,
                f"{uuid.uuid4().hex}_{safe_name}",
            ]
        )
        await asyncio.to_thread(self._write, relative, content)
        logger.info(f"Stored document {relative} ({len(content)} bytes)")
        return f"{self.base_url}/{relative}"

    def _write(self, relative: str, content: bytes) -> None:
        path = os.path.join(self.root, *relative.split("/"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
