"""Cart Quantity Rules — tests for pure quantity validation and merging.

Tests cover:
    - check_quantity accepts the bounds and rejects outside them
    - bools and non-integers are rejected
    - merged_quantity adds and respects the upper bound
"""

import pytest

from bookstore.core.enforce_cart import (
    MAX_LINE_QUANTITY, check_quantity, merged_quantity,
)
from bookstore.core.errors import ValidationError


def test_check_quantity_accepts_one():
    assert check_quantity(1) == 1


def test_check_quantity_accepts_upper_bound():
    assert check_quantity(MAX_LINE_QUANTITY) == MAX_LINE_QUANTITY


@pytest.mark.parametrize("quantity", [0, -1, MAX_LINE_QUANTITY + 1])
def test_check_quantity_rejects_out_of_range(quantity):
    with pytest.raises(ValidationError) as exc_info:
        check_quantity(quantity)
    assert exc_info.value.field == "quantity"


@pytest.mark.parametrize("quantity", [True, 2.5, "3", None])
def test_check_quantity_rejects_non_integers(quantity):
    with pytest.raises(ValidationError):
        check_quantity(quantity)


def test_merged_quantity_adds():
    assert merged_quantity(2, 3) == 5


def test_merged_quantity_rejects_overflow():
    with pytest.raises(ValidationError):
        merged_quantity(MAX_LINE_QUANTITY, 1)
