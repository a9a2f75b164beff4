"""Dependency Wiring — builds per-request services from app.state components.

Invariants:
    - Process-wide components (hasher, issuer, validator, db manager) are created once
      in the lifespan and read from request.app.state; nothing here is a module global
    - Services are built per request around the request's single AsyncSession
      (FastAPI caches get_db within a request, so every service shares it)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.infrastructure.database import get_db
from bookstore.infrastructure.passwords import PasswordHasher
from bookstore.infrastructure.tokens import TokenIssuer, TokenValidator
from bookstore.services.accounts import AccountService
from bookstore.services.books import BookCatalog
from bookstore.services.cart import CartAggregator
from bookstore.services.reviews import ReviewGuard


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_token_validator(request: Request) -> TokenValidator:
    return request.app.state.token_validator


def get_account_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(db, hasher)


def get_book_catalog(db: AsyncSession = Depends(get_db)) -> BookCatalog:
    return BookCatalog(db)


def get_cart_aggregator(db: AsyncSession = Depends(get_db)) -> CartAggregator:
    return CartAggregator(db)


def get_review_guard(
    db: AsyncSession = Depends(get_db),
    accounts: AccountService = Depends(get_account_service),
    books: BookCatalog = Depends(get_book_catalog),
) -> ReviewGuard:
    return ReviewGuard(db, accounts, books)
