"""Account Service — registration, credential checks and account lifecycle.

Invariants:
    - Email uniqueness is owned by uq_accounts_email; the pre-check is only a fast path
    - Lookups ignore soft-deleted rows, but a deleted account's email stays taken
    - New accounts are "standard" unless created through the admin group
    - Never caches accounts across requests: every call re-reads the store

Design Decisions:
    - Token issuing stays in the route layer: this service answers "who is this",
      the issuer answers "prove it" (ADR: single responsibility)
    - Password work goes through PasswordHasher.*_async (worker thread)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import AccountId, Role
from bookstore.core.errors import (
    EmailTakenError, ErrorContext, InvalidCredentialsError, ResourceNotFoundError,
)
from bookstore.infrastructure.database import is_unique_violation
from bookstore.infrastructure.passwords import PasswordHasher
from bookstore.models.account import Account
from bookstore.schemas.account import AccountCreate, ProfileUpdate

logger = logging.getLogger(__name__)


class AccountService:
    """Account persistence and lifecycle. Implements AccountLookup."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    # ─── Lookups ─────────────────────────────────────────────────

    async def get_live(self, account_id: AccountId) -> Account | None:
        result = await self.db.execute(
            select(Account)
            .where(Account.id == account_id)
            .where(Account.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def get(self, account_id: AccountId) -> Account:
        account = await self.get_live(account_id)
        if account is None:
            raise ResourceNotFoundError("Account", str(account_id))
        return account

    async def _email_taken(self, email: str) -> bool:
        result = await self.db.execute(
            select(Account.id).where(Account.email == email),
        )
        return result.first() is not None

    async def list_accounts(self, limit: int = 50, offset: int = 0) -> tuple[list[Account], int]:
        total = await self.db.scalar(
            select(func.count(Account.id)).where(Account.deleted_at.is_(None)),
        )
        result = await self.db.execute(
            select(Account)
            .where(Account.deleted_at.is_(None))
            .order_by(Account.id)
            .limit(limit)
            .offset(offset),
        )
        return list(result.scalars().all()), total or 0

    # ─── Registration & login ────────────────────────────────────

    async def register(
        self, data: AccountCreate, role: Role = Role.STANDARD,
    ) -> Account:
        """Create an account. Raises EmailTakenError (409)."""
        if await self._email_taken(data.email):
            raise EmailTakenError()

        account = Account(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password_hash=await self.hasher.hash_async(data.password),
            role=role.value,
            is_active=True,
        )
        self.db.add(account)
        await self._commit_unique_email()
        await self.db.refresh(account)
        logger.info(
            "Account registered",
            extra={"account_id": account.id, "role": account.role},
        )
        return account

    async def authenticate(self, email: str, password: str) -> Account:
        """Check credentials. Unknown email → 404, wrong password → 400."""
        result = await self.db.execute(
            select(Account)
            .where(Account.email == email)
            .where(Account.deleted_at.is_(None)),
        )
        account = result.scalar_one_or_none()
        if account is None:
            raise ResourceNotFoundError("User", email)
        if not await self.hasher.verify_async(account.password_hash, password):
            raise InvalidCredentialsError(ErrorContext(account_id=account.id))
        logger.info("Account logged in", extra={"account_id": account.id})
        return account

    # ─── Profile & lifecycle ─────────────────────────────────────

    async def update_profile(
        self, account_id: AccountId, changes: ProfileUpdate,
    ) -> Account:
        """Apply non-empty fields. A new password is re-hashed."""
        account = await self.get(account_id)
        if changes.first_name:
            account.first_name = changes.first_name.strip()
        if changes.last_name:
            account.last_name = changes.last_name.strip()
        if changes.email and changes.email != account.email:
            if await self._email_taken(changes.email):
                raise EmailTakenError(ErrorContext(account_id=account.id))
            account.email = changes.email
        if changes.password:
            account.password_hash = await self.hasher.hash_async(changes.password)
        await self._commit_unique_email()
        await self.db.refresh(account)
        return account

    async def set_active(self, account_id: AccountId, active: bool) -> Account:
        account = await self.get(account_id)
        account.is_active = active
        await self.db.commit()
        logger.info(
            "Account activated" if active else "Account deactivated",
            extra={"account_id": account.id},
        )
        return account

    async def delete(self, account_id: AccountId) -> None:
        """Terminal soft delete. Outstanding tokens keep validating until expiry."""
        account = await self.get(account_id)
        account.deleted_at = datetime.now(timezone.utc)
        account.is_active = False
        await self.db.commit()
        logger.info("Account deleted", extra={"account_id": account.id})

    async def promote(self, account_id: AccountId) -> Account:
        account = await self.get(account_id)
        account.role = Role.ADMIN.value
        await self.db.commit()
        logger.info(
            "Account promoted", extra={"account_id": account.id, "role": account.role},
        )
        return account

    async def _commit_unique_email(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise EmailTakenError() from e
            raise
