"""Cart Routes — the caller's own cart; the account id always comes from the token.

Invariants:
    - POST /items merges into an existing line (never a second row for the same book)
    - PUT/DELETE on a missing line → 404
    - quantity < 1 → 400
"""

from fastapi import APIRouter, Depends, Path

from bookstore.api.auth import require_identity
from bookstore.api.dependencies import get_cart_aggregator
from bookstore.core.domain_types import MAX_ID, BookId, CartEntry, Identity
from bookstore.schemas.account import MessageResponse
from bookstore.schemas.cart import (
    CartEntryResponse, CartItemAdd, CartItemUpdate, CartResponse,
)
from bookstore.services.cart import CartAggregator

router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


def _entry_response(entry: CartEntry) -> CartEntryResponse:
    return CartEntryResponse(book_id=entry.book_id, quantity=entry.quantity)


@router.get("", response_model=CartResponse)
async def get_cart(
    identity: Identity = Depends(require_identity),
    cart: CartAggregator = Depends(get_cart_aggregator),
):
    entries = await cart.entries(identity.account_id)
    return CartResponse(
        items=[_entry_response(e) for e in entries],
        total_quantity=sum(e.quantity for e in entries),
    )


@router.post("/items", response_model=CartEntryResponse)
async def add_cart_item(
    body: CartItemAdd,
    identity: Identity = Depends(require_identity),
    cart: CartAggregator = Depends(get_cart_aggregator),
):
    entry = await cart.add(identity.account_id, BookId(body.book_id), body.quantity)
    return _entry_response(entry)


@router.put("/items/{book_id}", response_model=CartEntryResponse)
async def update_cart_item(
    body: CartItemUpdate,
    book_id: int = Path(ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    cart: CartAggregator = Depends(get_cart_aggregator),
):
    entry = await cart.update(identity.account_id, BookId(book_id), body.quantity)
    return _entry_response(entry)


@router.delete("/items/{book_id}", response_model=MessageResponse)
async def remove_cart_item(
    book_id: int = Path(ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    cart: CartAggregator = Depends(get_cart_aggregator),
):
    await cart.remove(identity.account_id, BookId(book_id))
    return MessageResponse(message="Item removed from cart")
