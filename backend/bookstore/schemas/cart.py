"""Cart Schemas — add/update payloads and cart line responses.

Invariants:
    - quantity >= 1 at the boundary (core/enforce_cart.py repeats the check for non-HTTP callers)
    - 1 <= book_id <= MAX_ID (32-bit INTEGER column)
"""

from pydantic import BaseModel, Field

from bookstore.core.domain_types import MAX_ID


class CartItemAdd(BaseModel):
    book_id: int = Field(ge=1, le=MAX_ID)
    quantity: int = Field(1, ge=1, le=10_000)


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1, le=10_000)


class CartEntryResponse(BaseModel):
    book_id: int
    quantity: int


class CartResponse(BaseModel):
    items: list[CartEntryResponse]
    total_quantity: int
