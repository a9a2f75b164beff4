"""Auth Routes — register, login, logout.

Invariants:
    - register/login answer 200 with a fresh token in the body and in the auth cookie
    - Wrong password → 400 and no token; unknown email → 404; taken email → 409
    - logout only clears the client cookie: the token stays valid until it expires
      (there is no server-side revocation list)
"""

import logging

from fastapi import APIRouter, Depends, Response

from bookstore.api.dependencies import get_account_service, get_token_issuer
from bookstore.config import Settings, get_settings
from bookstore.infrastructure.tokens import TokenIssuer
from bookstore.schemas.account import (
    AccountCreate, AccountResponse, AuthResponse, LoginRequest, MessageResponse,
)
from bookstore.services.accounts import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.token_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse)
async def register(
    body: AccountCreate,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    """Create a standard account and log it in."""
    account = await accounts.register(body)
    token = issuer.issue(account.id)
    _set_auth_cookie(response, token, settings)
    return AuthResponse(
        message="User created successfully",
        token=token,
        account=AccountResponse.model_validate(account),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
):
    account = await accounts.authenticate(body.email, body.password)
    token = issuer.issue(account.id)
    _set_auth_cookie(response, token, settings)
    return AuthResponse(
        message="Logged in successfully",
        token=token,
        account=AccountResponse.model_validate(account),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Clear the auth cookie. Does not revoke the token."""
    response.delete_cookie(settings.auth_cookie_name)
    return MessageResponse(message="Logged out successfully")
