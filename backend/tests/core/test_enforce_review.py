"""Review Input Rules — rating bounds and comment normalization."""

import pytest

from bookstore.core.enforce_review import (
    MAX_COMMENT_LENGTH, check_rating, normalize_comment,
)
from bookstore.core.errors import ValidationError


@pytest.mark.parametrize("rating", [1, 3, 5])
def test_check_rating_accepts_range(rating):
    assert check_rating(rating) == rating


@pytest.mark.parametrize("rating", [0, 6, -2, True, 4.5])
def test_check_rating_rejects(rating):
    with pytest.raises(ValidationError) as exc_info:
        check_rating(rating)
    assert exc_info.value.field == "rating"


def test_normalize_comment_strips_and_defaults():
    assert normalize_comment("  great read  ") == "great read"
    assert normalize_comment(None) == ""


def test_normalize_comment_rejects_long_text():
    with pytest.raises(ValidationError):
        normalize_comment("x" * (MAX_COMMENT_LENGTH + 1))
