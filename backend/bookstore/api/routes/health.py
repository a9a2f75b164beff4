"""Health Routes — is the process up, and can it serve authenticated traffic?

Invariants:
    - GET /health/ never touches the store (liveness only)
    - GET /health/ready is 200 only when the store answers SELECT 1 and the token
      validator and password hasher exist on app.state; otherwise 503 naming what failed
    - Neither probe requires a token
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

_AUTH_COMPONENTS = ("password_hasher", "token_issuer", "token_validator")


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": "bookstore-api"}


@router.get("/ready")
async def readiness(request: Request):
    state = request.app.state
    db_manager = getattr(state, "db_manager", None)
    checks = {
        "database": "healthy" if db_manager and await db_manager.health_check()
        else "unavailable",
        "auth": "healthy" if all(hasattr(state, name) for name in _AUTH_COMPONENTS)
        else "unconfigured",
    }
    if any(value != "healthy" for value in checks.values()):
        logger.warning(f"Readiness failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
