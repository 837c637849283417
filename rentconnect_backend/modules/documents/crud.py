"""CRUD operations for documents."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .categories import DocumentCategory
from .models import Document
from .owners import DocumentOwner


async def create_document(
    db: AsyncSession,
    owner: DocumentOwner,
    category: DocumentCategory,
    url: str,
    name: str | None = None,
    content_type: str | None = None,
    size: int | None = None,
    description: str | None = None,
) -> Document:
    """Create a document row."""
    document = Document(
        owner=owner,
        category=category,
        url=url,
        name=name,
        content_type=content_type,
        size=size,
        description=description,
        is_verified=False,
    )
    db.add(document)
    await db.flush()
    return document


async def get_documents_for_owner(
    db: AsyncSession, owner: DocumentOwner
) -> list[Document]:
    """Get all documents of one owner, newest first."""
    result = await db.execute(
        select(Document)
        .where(
            Document.owner_type == owner.owner_type,
            Document.owner_id == owner.id,
        )
        .order_by(Document.id.desc())
    )
    return list(result.scalars().all())


async def delete_documents_for_owner(db: AsyncSession, owner: DocumentOwner) -> int:
    """Delete all documents of one owner; returns the number removed."""
    result = await db.execute(
        delete(Document).where(
            Document.owner_type == owner.owner_type,
            Document.owner_id == owner.id,
        )
    )
    await db.flush()
    return result.rowcount or 0
