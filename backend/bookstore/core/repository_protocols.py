"""Boundary Protocols — contracts between core rules and the persistence shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Lookups return live rows or None; they never raise for absence
    - Implementations provided by services/ and handed in explicitly (no globals)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the role gate and review guard
      depend on these lookups, not on concrete services
"""

from typing import Protocol

from bookstore.core.domain_types import AccountId, BookId


class AccountLike(Protocol):
    """Structural contract for Account rows passed to gates and serializers."""
    id: int
    email: str
    role: str
    is_active: bool


class BookLike(Protocol):
    """Structural contract for Book rows."""
    id: int
    title: str


class AccountLookup(Protocol):
    """Resolve a live (not deleted) account by id."""
    async def get_live(self, account_id: AccountId) -> AccountLike | None: ...


class BookLookup(Protocol):
    """Resolve a catalog book by id."""
    async def find(self, book_id: BookId) -> BookLike | None: ...
