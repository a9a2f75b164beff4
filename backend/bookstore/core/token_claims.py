"""Token Claims — pure construction and parsing of the identity claim set.

Invariants:
    - Claim keys are exactly account_id, issued_at, expires_at (unix seconds)
    - parse_claims accepts only account ids in [1, MAX_ID] and integer timestamps
    - Any shape mismatch raises UnauthenticatedError (never KeyError/TypeError)

Design Decisions:
    - Parsing separated from signature checks: signing lives in infrastructure/tokens.py,
      this module is pure and testable without a secret
"""

from datetime import datetime, timedelta

from bookstore.core.domain_types import MAX_ID, AccountId, TokenClaims
from bookstore.core.errors import UnauthenticatedError


TOKEN_LIFETIME: timedelta = timedelta(hours=24)


def build_claims(
    account_id: int, now: datetime, lifetime: timedelta = TOKEN_LIFETIME,
) -> TokenClaims:
    issued_at = int(now.timestamp())
    return TokenClaims(
        account_id=AccountId(account_id),
        issued_at=issued_at,
        expires_at=issued_at + int(lifetime.total_seconds()),
    )


def claims_to_payload(claims: TokenClaims) -> dict:
    return {
        "account_id": claims.account_id,
        "issued_at": claims.issued_at,
        "expires_at": claims.expires_at,
    }


def parse_claims(payload: dict) -> TokenClaims:
    """Map a decoded payload onto TokenClaims. Raises UnauthenticatedError."""
    account_id = payload.get("account_id")
    expires_at = payload.get("expires_at")
    issued_at = payload.get("issued_at", 0)
    if not _is_int(account_id) or not 1 <= account_id <= MAX_ID:
        raise UnauthenticatedError("Token is missing a valid account_id")
    if not _is_int(expires_at):
        raise UnauthenticatedError("Token is missing a valid expires_at")
    if not _is_int(issued_at):
        raise UnauthenticatedError("Token has a malformed issued_at")
    return TokenClaims(
        account_id=AccountId(account_id),
        issued_at=issued_at,
        expires_at=expires_at,
    )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
