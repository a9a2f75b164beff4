"""Review Input Rules — pure validation for rating and comment.

Invariants:
    - rating is an integer in [MIN_RATING, MAX_RATING]
    - comment is stripped and at most MAX_COMMENT_LENGTH characters
    - Uniqueness per (account, book) is NOT checked here: the store constraint owns it
"""

from bookstore.core.errors import ValidationError


MIN_RATING: int = 1
MAX_RATING: int = 5
MAX_COMMENT_LENGTH: int = 2000


def check_rating(rating: int) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("rating must be an integer", "rating")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"rating must be between {MIN_RATING} and {MAX_RATING}", "rating",
        )
    return rating


def normalize_comment(comment: str | None) -> str:
    comment = (comment or "").strip()
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"comment must be at most {MAX_COMMENT_LENGTH} characters", "comment",
        )
    return comment
