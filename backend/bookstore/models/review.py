"""Review ORM — one account's rating of one book.

Invariants:
    - At most one row per (account_id, book_id) — enforced by uq_reviews_account_book
    - rating in [1, 5] — CHECK constraint mirrors core/enforce_review.py
    - Immutable after insert (no update path anywhere)
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base


class Review(Base):
    """Review entity."""
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint(
            "account_id", "book_id", name="uq_reviews_account_book",
        ),
        CheckConstraint("rating >= 1 AND rating <= 5", name="rating_range"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=False,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
