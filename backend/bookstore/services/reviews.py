"""Review Guard — one review per (account, book), enforced by the store.

Invariants:
    - Checks run in order: account exists (404) → book exists (404) → no prior review (409)
    - uq_reviews_account_book is the authoritative duplicate check; the SELECT pre-check
      is only a fast path and losing its race still ends in DuplicateReviewError
    - Reviews are immutable once inserted (no update path)
    - Insert + commit is one transaction; a failed insert leaves nothing behind

Design Decisions:
    - Depends on AccountLookup/BookLookup protocols, not concrete services:
      the guard only needs "does it exist", not account or catalog behavior
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import AccountId, BookId
from bookstore.core.enforce_review import check_rating, normalize_comment
from bookstore.core.errors import (
    DuplicateReviewError, ErrorContext, ResourceNotFoundError,
)
from bookstore.core.repository_protocols import AccountLookup, BookLookup
from bookstore.infrastructure.database import is_unique_violation
from bookstore.models.review import Review

logger = logging.getLogger(__name__)


class ReviewGuard:
    """Creates reviews and lists them per book."""

    def __init__(
        self, db: AsyncSession, accounts: AccountLookup, books: BookLookup,
    ):
        self.db = db
        self.accounts = accounts
        self.books = books

    async def _existing(self, account_id: AccountId, book_id: BookId) -> Review | None:
        result = await self.db.execute(
            select(Review)
            .where(Review.account_id == account_id)
            .where(Review.book_id == book_id),
        )
        return result.scalar_one_or_none()

    async def add(
        self, account_id: AccountId, book_id: BookId,
        rating: int, comment: str | None,
    ) -> Review:
        rating = check_rating(rating)
        comment = normalize_comment(comment)
        ctx = ErrorContext(account_id=account_id, book_id=book_id)

        if await self.accounts.get_live(account_id) is None:
            raise ResourceNotFoundError("Account", str(account_id), ctx)
        if await self.books.find(book_id) is None:
            raise ResourceNotFoundError("Book", str(book_id), ctx)
        if await self._existing(account_id, book_id) is not None:
            raise DuplicateReviewError(account_id, book_id)

        review = Review(
            account_id=account_id, book_id=book_id,
            rating=rating, comment=comment,
        )
        self.db.add(review)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise DuplicateReviewError(account_id, book_id) from e
            raise
        await self.db.refresh(review)
        logger.info(
            "Review created", extra={"account_id": account_id, "book_id": book_id},
        )
        return review

    async def list_for_book(self, book_id: BookId) -> list[Review]:
        if await self.books.find(book_id) is None:
            raise ResourceNotFoundError("Book", str(book_id))
        result = await self.db.execute(
            select(Review)
            .where(Review.book_id == book_id)
            .order_by(Review.created_at.desc(), Review.id.desc()),
        )
        return list(result.scalars().all())
