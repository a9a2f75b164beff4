"""CartItem ORM — one line of an account's cart.

Invariants:
    - At most one row per (account_id, book_id) — enforced by uq_cart_items_account_book
    - quantity >= 1 — enforced by a CHECK constraint, not only by the API schema
    - book_id is NOT a foreign key: the catalog is an external collaborator

Design Decisions:
    - The unique constraint doubles as the ON CONFLICT target for the merging upsert
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base


class CartItem(Base):
    """Cart line — merged on repeated adds, never duplicated."""
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint(
            "account_id", "book_id", name="uq_cart_items_account_book",
        ),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
    )
    book_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
