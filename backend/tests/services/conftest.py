"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state points at the test engine, a fast hasher and a fixed-secret issuer/validator
    - Helpers create accounts directly through AccountService (no HTTP round-trip)

Design Decisions:
    - SQLite in-memory: fast, no external dependency; SQLite supports ON CONFLICT DO UPDATE
      and enforces UNIQUE constraints, which is what the cart and review tests exercise
    - bcrypt rounds=4 in tests: same code path, a fraction of the CPU
    - db_manager built with __new__: reuses the test engine instead of opening a new one
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from bookstore.core.domain_types import Role
from bookstore.db.base import Base
from bookstore.db.session import create_schema, create_session_factory
from bookstore.infrastructure.database import DatabaseSessionManager
from bookstore.infrastructure.passwords import PasswordHasher
from bookstore.infrastructure.tokens import TokenIssuer, TokenValidator
from bookstore.main import app
from bookstore.models.book import Book
from bookstore.schemas.account import AccountCreate
from bookstore.services.accounts import AccountService
import bookstore.models  # noqa: F401

TEST_SECRET = "test-secret"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    await create_schema(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def validator():
    return TokenValidator(TEST_SECRET)


@pytest.fixture
async def client(test_engine, test_session_factory, hasher, issuer, validator):
    """FastAPI test client with app.state wired to the test DB."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    app.state.db_manager = fake_manager
    app.state.password_hasher = hasher
    app.state.token_issuer = issuer
    app.state.token_validator = validator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    for name in ("db_manager", "password_hasher", "token_issuer", "token_validator"):
        delattr(app.state, name)


@pytest.fixture
def make_account(test_session_factory, hasher):
    """Create an account in the DB. Returns the Account row."""
    async def _make(
        email: str = "user@example.com", password: str = "secret",
        role: Role = Role.STANDARD,
    ):
        async with test_session_factory() as db:
            return await AccountService(db, hasher).register(
                AccountCreate(email=email, password=password), role=role,
            )
    return _make


@pytest.fixture
def make_book(test_session_factory):
    """Insert a catalog book. Returns the Book row."""
    async def _make(title: str = "Dune", **fields):
        async with test_session_factory() as db:
            book = Book(title=title, **fields)
            db.add(book)
            await db.commit()
            await db.refresh(book)
            return book
    return _make


@pytest.fixture
def auth_headers(issuer):
    """Bearer header for an account id."""
    def _headers(account_id: int) -> dict:
        return {"Authorization": f"Bearer {issuer.issue(account_id)}"}
    return _headers


@pytest.fixture
async def user(make_account):
    return await make_account("reader@example.com", "reader-pass")


@pytest.fixture
async def admin(make_account):
    return await make_account("admin@example.com", "admin-pass", role=Role.ADMIN)
