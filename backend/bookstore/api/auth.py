"""Request Gates — AuthMiddleware (require_identity) and RoleGate (require_admin).

Invariants:
    - require_identity never touches the store: signature + expiry only
    - On failure the wrapped handler never runs (401 raised from the dependency)
    - On success Identity is attached to request.state.identity for the rest of the request
    - require_admin re-reads the account on every request (no caching): a deleted
      account → 404, a non-admin role → 403
    - Token source order: Authorization: Bearer header, then the auth cookie

Design Decisions:
    - FastAPI dependencies over ASGI middleware: gates compose with Depends and can be
      applied to a whole router (dependencies=[Depends(require_admin)])
    - HTTPBearer(auto_error=False): missing credentials must produce our 401 envelope,
      not FastAPI's default 403
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookstore.api.dependencies import get_account_service, get_token_validator
from bookstore.config import Settings, get_settings
from bookstore.core.domain_types import Identity, Role
from bookstore.core.errors import (
    ErrorContext, ForbiddenError, ResourceNotFoundError, UnauthenticatedError,
)
from bookstore.core.repository_protocols import AccountLike, AccountLookup
from bookstore.infrastructure.tokens import TokenValidator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    cookie_name: str,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(cookie_name) or None


async def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    validator: TokenValidator = Depends(get_token_validator),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """AuthMiddleware: resolve the caller or short-circuit with 401."""
    token = extract_token(request, credentials, settings.auth_cookie_name)
    if token is None:
        raise UnauthenticatedError()
    identity = validator.validate(token)
    request.state.identity = identity
    return identity


async def require_admin(
    identity: Identity = Depends(require_identity),
    accounts: AccountLookup = Depends(get_account_service),
) -> AccountLike:
    """RoleGate: load the caller's account and require the admin role."""
    account = await accounts.get_live(identity.account_id)
    if account is None:
        raise ResourceNotFoundError(
            "Account", str(identity.account_id),
            ErrorContext(account_id=identity.account_id),
        )
    if account.role != Role.ADMIN.value:
        logger.warning(
            "Admin route refused", extra={"account_id": account.id, "role": account.role},
        )
        raise ForbiddenError(context=ErrorContext(account_id=account.id))
    return account
