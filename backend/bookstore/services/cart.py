"""Cart Aggregator — merges repeated adds into a single cart line per (account, book).

Invariants:
    - At most one cart_items row per (account_id, book_id), even under concurrent adds
    - add() merges: quantity += qty on an existing line, insert otherwise, as ONE statement
      on PostgreSQL/SQLite (INSERT .. ON CONFLICT DO UPDATE), a row-locked
      read-modify-write on any other dialect
    - Every public operation is a single transaction: committed on success,
      rolled back (by DatabaseSessionManager) on failure, never half-applied
    - No in-process locks: several server processes may share the store

Design Decisions:
    - Store-side increment over read-then-write: two concurrent adds both observing
      "absent" would otherwise insert twice (ADR: linearizability per line comes from the store)
    - update()/remove() are single UPDATE/DELETE statements; rowcount 0 means 404
    - book_id is not checked against the catalog (catalog is an external collaborator)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import AccountId, BookId, CartEntry
from bookstore.core.enforce_cart import (
    MAX_LINE_QUANTITY, check_quantity, merged_quantity,
)
from bookstore.core.errors import (
    ErrorContext, ResourceNotFoundError, ValidationError,
)
from bookstore.infrastructure.database import is_unique_violation
from bookstore.models.cart_item import CartItem

logger = logging.getLogger(__name__)

# Dialects whose INSERT supports ON CONFLICT (account_id, book_id) DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CartAggregator:
    """Cart line persistence with merge semantics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _dialect(self) -> str:
        return self.db.get_bind().dialect.name

    async def entries(self, account_id: AccountId) -> list[CartEntry]:
        result = await self.db.execute(
            select(CartItem)
            .where(CartItem.account_id == account_id)
            .order_by(CartItem.id),
        )
        return [
            CartEntry(
                account_id=AccountId(item.account_id),
                book_id=BookId(item.book_id),
                quantity=item.quantity,
            )
            for item in result.scalars().all()
        ]

    async def add(
        self, account_id: AccountId, book_id: BookId, quantity: int,
    ) -> CartEntry:
        """Add qty of a book, merging into an existing line."""
        check_quantity(quantity)
        insert = _UPSERT_INSERTS.get(self._dialect())
        if insert is not None:
            total = await self._upsert(insert, account_id, book_id, quantity)
        else:
            total = await self._locked_merge(account_id, book_id, quantity)

        if total > MAX_LINE_QUANTITY:
            await self.db.rollback()
            raise ValidationError(
                f"cart line would exceed {MAX_LINE_QUANTITY} items", "quantity",
            )
        await self.db.commit()
        logger.info(
            f"Cart line now holds {total}",
            extra={"account_id": account_id, "book_id": book_id},
        )
        return CartEntry(account_id=account_id, book_id=book_id, quantity=total)

    async def _upsert(
        self, insert, account_id: AccountId, book_id: BookId, quantity: int,
    ) -> int:
        now = datetime.now(timezone.utc)
        stmt = insert(CartItem).values(
            account_id=account_id, book_id=book_id,
            quantity=quantity, updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["account_id", "book_id"],
            set_={
                "quantity": CartItem.quantity + stmt.excluded.quantity,
                "updated_at": now,
            },
        ).returning(CartItem.quantity)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def _locked_merge(
        self, account_id: AccountId, book_id: BookId, quantity: int,
        retry: bool = True,
    ) -> int:
        """SELECT .. FOR UPDATE, then update or insert inside the same transaction."""
        result = await self.db.execute(
            select(CartItem)
            .where(CartItem.account_id == account_id)
            .where(CartItem.book_id == book_id)
            .with_for_update(),
        )
        item = result.scalar_one_or_none()
        if item is not None:
            item.quantity = merged_quantity(item.quantity, quantity)
            item.updated_at = datetime.now(timezone.utc)
            await self.db.flush()
            return item.quantity

        self.db.add(CartItem(
            account_id=account_id, book_id=book_id, quantity=quantity,
        ))
        try:
            await self.db.flush()
        except IntegrityError as e:
            # A concurrent insert won the race; the row now exists and can be locked.
            await self.db.rollback()
            if not (retry and is_unique_violation(e)):
                raise
            return await self._locked_merge(
                account_id, book_id, quantity, retry=False,
            )
        return quantity

    async def update(
        self, account_id: AccountId, book_id: BookId, quantity: int,
    ) -> CartEntry:
        """Replace the quantity of an existing line. Raises 404 if absent."""
        check_quantity(quantity)
        result = await self.db.execute(
            update(CartItem)
            .where(CartItem.account_id == account_id)
            .where(CartItem.book_id == book_id)
            .values(quantity=quantity, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFoundError(
                "Cart item", str(book_id),
                ErrorContext(account_id=account_id, book_id=book_id),
            )
        await self.db.commit()
        return CartEntry(account_id=account_id, book_id=book_id, quantity=quantity)

    async def remove(self, account_id: AccountId, book_id: BookId) -> None:
        """Delete the line. Raises 404 if absent."""
        result = await self.db.execute(
            delete(CartItem)
            .where(CartItem.account_id == account_id)
            .where(CartItem.book_id == book_id)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFoundError(
                "Cart item", str(book_id),
                ErrorContext(account_id=account_id, book_id=book_id),
            )
        await self.db.commit()
