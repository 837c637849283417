"""FastAPI dependencies for the tenant management routes."""

from collections.abc import AsyncIterator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ...config import settings
from ...core.unit_of_work import UnitOfWork
from ...database import AsyncSessionLocal
from ..documents.storage import DocumentStore, LocalDocumentStore
from ..notifications import LoggingNotifier, Notifier


async def get_uow() -> AsyncIterator[UnitOfWork]:
    """One unit of work (and session) per request."""
    async with UnitOfWork(AsyncSessionLocal) as uow:
        yield uow


@lru_cache
def get_notifier() -> Notifier:
    return LoggingNotifier()


@lru_cache
def get_document_store() -> DocumentStore:
    return LocalDocumentStore(
        root=settings.document_storage_path, base_url=settings.document_base_url
    )


UoW = Annotated[UnitOfWork, Depends(get_uow)]
NotifierDep = Annotated[Notifier, Depends(get_notifier)]
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]
