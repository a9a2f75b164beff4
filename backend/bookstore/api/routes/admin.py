"""Admin Routes — account administration behind the RoleGate.

Invariants:
    - require_admin is applied once, at router level: no admin route can skip it
    - No token → 401, valid token but standard role → 403, caller account gone → 404
"""

from fastapi import APIRouter, Depends, Path, Query

from bookstore.api.auth import require_admin
from bookstore.api.dependencies import get_account_service
from bookstore.core.domain_types import MAX_ID, AccountId, Role
from bookstore.schemas.account import AccountCreate, AccountResponse
from bookstore.services.accounts import AccountService

router = APIRouter(
    prefix="/api/v1/admin", tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.post("/accounts", response_model=AccountResponse)
async def create_admin_account(
    body: AccountCreate, accounts: AccountService = Depends(get_account_service),
):
    """Create an account that starts with the admin role."""
    return await accounts.register(body, role=Role.ADMIN)


@router.get("/accounts")
async def list_accounts(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    rows, total = await accounts.list_accounts(limit, offset)
    return {
        "accounts": [
            AccountResponse.model_validate(a).model_dump(mode="json") for a in rows
        ],
        "pagination": {"limit": limit, "offset": offset, "total": total},
    }


@router.get("/accounts/{account_id}", response_model=AccountResponse)
async def inspect_account(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.get(AccountId(account_id))


@router.put("/accounts/{account_id}/promote", response_model=AccountResponse)
async def promote_account(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.promote(AccountId(account_id))
