"""Async Session Factory — sessions and schema setup outside the FastAPI request cycle.

Invariants:
    - Meant for scripts and test fixtures
    - create_schema is for local runs and tests only; production schema is owned by alembic

Design Decisions:
    - Separate from infrastructure/database.py: no pooling policy, no error mapping
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bookstore.db.base import Base


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an existing engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata."""
    import bookstore.models  # noqa: F401  (registers tables)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
