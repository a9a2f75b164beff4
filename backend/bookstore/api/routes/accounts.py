"""Account Routes — profile read/update and activation lifecycle.

Invariants:
    - Every route requires a valid identity token (router-level require_identity)
    - Non-integer ids → 400 (validation handler), missing or deleted accounts → 404
    - /me is declared before /{account_id} so it is not parsed as an id
"""

from fastapi import APIRouter, Depends, Path

from bookstore.api.auth import require_identity
from bookstore.api.dependencies import get_account_service
from bookstore.core.domain_types import MAX_ID, AccountId, Identity
from bookstore.schemas.account import (
    AccountResponse, MessageResponse, ProfileUpdate,
)
from bookstore.services.accounts import AccountService

router = APIRouter(
    prefix="/api/v1/accounts", tags=["accounts"],
    dependencies=[Depends(require_identity)],
)


@router.get("/me", response_model=AccountResponse)
async def get_own_profile(
    identity: Identity = Depends(require_identity),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.get(identity.account_id)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_profile(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.get(AccountId(account_id))


@router.put("/{account_id}", response_model=AccountResponse)
async def update_profile(
    body: ProfileUpdate,
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.update_profile(AccountId(account_id), body)


@router.put("/{account_id}/deactivate", response_model=MessageResponse)
async def deactivate_account(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.set_active(AccountId(account_id), False)
    return MessageResponse(message="User deactivated successfully")


@router.put("/{account_id}/activate", response_model=MessageResponse)
async def activate_account(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.set_active(AccountId(account_id), True)
    return MessageResponse(message="User activated successfully")


@router.delete("/{account_id}", response_model=MessageResponse)
async def delete_account(
    account_id: int = Path(ge=1, le=MAX_ID),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.delete(AccountId(account_id))
    return MessageResponse(message="User account deleted successfully")
