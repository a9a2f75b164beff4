"""Book Catalog — plain CRUD over the books table.

Invariants:
    - Absence is the only failure mode (404); no other catalog rules
    - Implements BookLookup for ReviewGuard
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import BookId
from bookstore.core.errors import ResourceNotFoundError
from bookstore.models.book import Book
from bookstore.schemas.book import BookCreate, BookUpdate

logger = logging.getLogger(__name__)


class BookCatalog:
    """Catalog reads for everyone, writes for admins (gated at the route layer)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, book_id: BookId) -> Book | None:
        return await self.db.get(Book, book_id)

    async def get(self, book_id: BookId) -> Book:
        book = await self.find(book_id)
        if book is None:
            raise ResourceNotFoundError("Book", str(book_id))
        return book

    async def list_books(self, limit: int = 50, offset: int = 0) -> tuple[list[Book], int]:
        total = await self.db.scalar(select(func.count(Book.id)))
        result = await self.db.execute(
            select(Book).order_by(Book.id).limit(limit).offset(offset),
        )
        return list(result.scalars().all()), total or 0

    async def create(self, data: BookCreate) -> Book:
        book = Book(**data.model_dump())
        self.db.add(book)
        await self.db.commit()
        await self.db.refresh(book)
        logger.info("Book created", extra={"book_id": book.id})
        return book

    async def update(self, book_id: BookId, data: BookUpdate) -> Book:
        book = await self.get(book_id)
        for key, value in data.model_dump().items():
            setattr(book, key, value)
        await self.db.commit()
        await self.db.refresh(book)
        return book

    async def delete(self, book_id: BookId) -> None:
        book = await self.get(book_id)
        await self.db.delete(book)
        await self.db.commit()
        logger.info("Book deleted", extra={"book_id": book_id})
