"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Uniqueness rules (email, cart line, review) live in the table definitions

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from bookstore.models.account import Account  # noqa: F401
from bookstore.models.book import Book  # noqa: F401
from bookstore.models.cart_item import CartItem  # noqa: F401
from bookstore.models.review import Review  # noqa: F401
