"""Cart Quantity Rules — pure validation for cart line quantities.

Invariants:
    - A stored quantity is always >= 1 (no zero or negative lines)
    - MAX_LINE_QUANTITY is the single source of truth for the upper bound
    - check_quantity is PURE: raises or returns the value, never touches the store

Design Decisions:
    - Merging is done by the store (upsert), not here: this module only guards inputs,
      so two processes adding to the same line cannot lose an increment
"""

from bookstore.core.errors import ValidationError


MIN_LINE_QUANTITY: int = 1
MAX_LINE_QUANTITY: int = 10_000


def check_quantity(quantity: int) -> int:
    """Reject quantities outside [MIN_LINE_QUANTITY, MAX_LINE_QUANTITY]."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity must be an integer", "quantity")
    if quantity < MIN_LINE_QUANTITY:
        raise ValidationError(
            f"quantity must be at least {MIN_LINE_QUANTITY}", "quantity",
        )
    if quantity > MAX_LINE_QUANTITY:
        raise ValidationError(
            f"quantity must be at most {MAX_LINE_QUANTITY}", "quantity",
        )
    return quantity


def merged_quantity(current: int, added: int) -> int:
    """Quantity after merging `added` into an existing line of `current`."""
    total = check_quantity(current) + check_quantity(added)
    if total > MAX_LINE_QUANTITY:
        raise ValidationError(
            f"cart line would exceed {MAX_LINE_QUANTITY} items", "quantity",
        )
    return total
