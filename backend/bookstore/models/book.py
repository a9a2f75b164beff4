"""Book ORM — a catalog entry.

Invariants:
    - id is a store-assigned autoincrement integer
    - quantity is stock on hand (>= 0), unrelated to cart quantities

Design Decisions:
    - Catalog rows carry no invariants beyond existence; reviews reference them by FK
"""

from sqlalchemy import CheckConstraint, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base


class Book(Base):
    """Book entity — read by everyone, written by admins."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="stock_non_negative"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    author: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    isbn: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    genre: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
