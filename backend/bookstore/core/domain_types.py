"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, BookId wrap store-assigned integers — never random, never client-chosen
    - Role has exactly two members; new accounts are STANDARD unless created by an admin
    - Identity and TokenClaims are immutable once decoded

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - str Enum for Role: serializes to JSON and stores in a String column without converters
    - TokenClaims is a fixed structure decoded once per request (no dict lookups downstream)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)
BookId = NewType("BookId", int)

# Ids live in 32-bit INTEGER columns; larger values are rejected at the boundary
MAX_ID = 2_147_483_647


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account roles — only ADMIN passes the role gate."""
    ADMIN = "admin"
    STANDARD = "standard"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TokenClaims:
    """Signed claim set carried by an identity token. Times are unix seconds."""
    account_id: AccountId
    issued_at: int
    expires_at: int

    def is_expired(self, now_ts: int) -> bool:
        return self.expires_at <= now_ts


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, attached to the request after token validation."""
    account_id: AccountId


@dataclass(frozen=True)
class CartEntry:
    """One cart line. At most one per (account_id, book_id)."""
    account_id: AccountId
    book_id: BookId
    quantity: int
