"""Identity Tokens — HS256 issuance and stateless validation.

Invariants:
    - Tokens carry exactly {account_id, issued_at, expires_at}; lifetime 24h by default
    - validate() performs no IO and shares no mutable state (safe under concurrency)
    - Every failure mode (bad signature, malformed, expired, wrong shape) is UnauthenticatedError
    - An empty signing secret is rejected when the issuer/validator is built (ConfigError)

Design Decisions:
    - python-jose for signing: same library the FastAPI auth examples use
    - expires_at checked here against an injectable clock instead of jose's `exp`
      handling: the claim name is part of the wire contract and tests need a clock
    - No revocation: logout only clears the client cookie, a token stays valid until
      expires_at (documented gap)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from bookstore.core.domain_types import Identity
from bookstore.core.errors import ConfigError, UnauthenticatedError
from bookstore.core.token_claims import (
    TOKEN_LIFETIME, build_claims, claims_to_payload, parse_claims,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _check_secret(secret: str) -> str:
    if not secret:
        raise ConfigError("JWT secret must not be empty", "jwt_secret")
    return secret


class TokenIssuer:
    """Mint signed, time-bounded identity tokens."""

    def __init__(
        self, secret: str, algorithm: str = "HS256",
        lifetime: timedelta = TOKEN_LIFETIME, clock: Clock = utc_now,
    ):
        self._secret = _check_secret(secret)
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, account_id: int) -> str:
        claims = build_claims(account_id, self._clock(), self._lifetime)
        return jwt.encode(
            claims_to_payload(claims), self._secret, algorithm=self._algorithm,
        )


class TokenValidator:
    """Verify signature and expiry, return the caller's Identity."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", clock: Clock = utc_now,
    ):
        self._secret = _check_secret(secret)
        self._algorithm = algorithm
        self._clock = clock

    def validate(self, token: str) -> Identity:
        if not token:
            raise UnauthenticatedError()
        try:
            payload = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.info(f"Token rejected: {type(e).__name__}")
            raise UnauthenticatedError("Invalid token") from e
        if not isinstance(payload, dict):
            raise UnauthenticatedError("Invalid token")

        claims = parse_claims(payload)
        if claims.is_expired(int(self._clock().timestamp())):
            raise UnauthenticatedError("Token has expired")
        return Identity(account_id=claims.account_id)
