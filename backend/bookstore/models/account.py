"""Account ORM — persists a customer or administrator identity.

Invariants:
    - id is a store-assigned autoincrement integer
    - email is unique across ALL rows, deleted ones included (uq_accounts_email)
    - password_hash is a bcrypt digest and is never serialized outward
    - role is "admin" or "standard"; registration always writes "standard"
    - deleted_at set means the account is gone for every lookup (terminal soft delete)

Design Decisions:
    - Soft delete over row removal: the email stays reserved and reviews keep
      their author reference
    - is_active is independent of deleted_at: deactivation is reversible, deletion is not
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.core.domain_types import Role
from bookstore.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """Account entity — owns cart items and reviews."""
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    last_name: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.STANDARD.value,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
