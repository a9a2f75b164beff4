"""Bookstore API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BookstoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store, hasher and token components built once in the lifespan and kept on app.state;
      a bad signing secret fails startup (ConfigError), never a request

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - app.state over module globals: every component reaches handlers as an explicit
      dependency, and tests swap them without monkeypatching modules
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api.error_handlers import register_error_handlers
from bookstore.api.routes import accounts, admin, auth, books, cart, health
from bookstore.config import Settings, get_settings
from bookstore.infrastructure.database import DatabaseSessionManager
from bookstore.infrastructure.observability import setup_logging
from bookstore.infrastructure.passwords import PasswordHasher
from bookstore.infrastructure.tokens import TokenIssuer, TokenValidator

logger = logging.getLogger(__name__)


def init_components(app: FastAPI, settings: Settings) -> None:
    """Build the process-wide components and attach them to app.state."""
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(hours=settings.token_ttl_hours),
    )
    app.state.token_validator = TokenValidator(
        settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_components(app, settings)
    logger.info("Bookstore API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Bookstore API shutting down")


app = FastAPI(
    title="Bookstore API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(cart.router)
app.include_router(books.router)
app.include_router(admin.router)

register_error_handlers(app)
