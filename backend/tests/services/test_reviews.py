"""Review Guard — one review per (account, book).

Tests cover:
    - first review succeeds, second by the same account → 409 and one row stored
    - the store constraint still rejects a duplicate when the pre-check is bypassed
    - missing book → 404; rating outside 1..5 → 400
    - listing is per book and newest first
"""

import pytest
from sqlalchemy import func, select

from bookstore.core.domain_types import AccountId, BookId
from bookstore.core.errors import DuplicateReviewError, ResourceNotFoundError
from bookstore.models.review import Review
from bookstore.services.accounts import AccountService
from bookstore.services.books import BookCatalog
from bookstore.services.reviews import ReviewGuard


async def _review_count(session_factory, book_id) -> int:
    async with session_factory() as db:
        return await db.scalar(
            select(func.count(Review.id)).where(Review.book_id == book_id),
        )


async def test_add_review(client, user, make_book, auth_headers):
    book = await make_book("Dune")
    resp = await client.post(
        f"/api/v1/books/{book.id}/reviews",
        json={"rating": 5, "comment": "  Spice must flow  "},
        headers=auth_headers(user.id),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["account_id"] == user.id
    assert body["book_id"] == book.id
    assert body["rating"] == 5
    assert body["comment"] == "Spice must flow"


async def test_second_review_conflicts(
    client, user, make_book, auth_headers, test_session_factory,
):
    book = await make_book("Dune")
    headers = auth_headers(user.id)
    first = await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 4}, headers=headers,
    )
    assert first.status_code == 200
    second = await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 1}, headers=headers,
    )
    assert second.status_code == 409
    assert second.json()["code"] == "DUPLICATE_REVIEW"
    assert await _review_count(test_session_factory, book.id) == 1


async def test_other_account_may_review(client, user, admin, make_book, auth_headers):
    book = await make_book("Dune")
    await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 4},
        headers=auth_headers(user.id),
    )
    resp = await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 2},
        headers=auth_headers(admin.id),
    )
    assert resp.status_code == 200


async def test_review_missing_book_is_404(client, user, auth_headers):
    resp = await client.post(
        "/api/v1/books/404/reviews", json={"rating": 3},
        headers=auth_headers(user.id),
    )
    assert resp.status_code == 404


@pytest.mark.parametrize("rating", [0, 6])
async def test_rating_out_of_range_is_400(client, user, make_book, auth_headers, rating):
    book = await make_book("Dune")
    resp = await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": rating},
        headers=auth_headers(user.id),
    )
    assert resp.status_code == 400


async def test_list_reviews_newest_first(client, user, admin, make_book, auth_headers):
    book = await make_book("Dune")
    other = await make_book("Emma")
    await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 4},
        headers=auth_headers(user.id),
    )
    await client.post(
        f"/api/v1/books/{book.id}/reviews", json={"rating": 2},
        headers=auth_headers(admin.id),
    )
    await client.post(
        f"/api/v1/books/{other.id}/reviews", json={"rating": 5},
        headers=auth_headers(user.id),
    )
    resp = await client.get(
        f"/api/v1/books/{book.id}/reviews", headers=auth_headers(user.id),
    )
    assert resp.status_code == 200
    assert [r["rating"] for r in resp.json()] == [2, 4]


async def test_list_reviews_missing_book_is_404(client, user, auth_headers):
    resp = await client.get("/api/v1/books/404/reviews", headers=auth_headers(user.id))
    assert resp.status_code == 404


# ─── Service level ───────────────────────────────────────────────


def _guard(db, hasher) -> ReviewGuard:
    return ReviewGuard(db, AccountService(db, hasher), BookCatalog(db))


async def test_store_constraint_catches_missed_precheck(
    test_db, hasher, user, make_book, monkeypatch, test_session_factory,
):
    book = await make_book("Dune")
    guard = _guard(test_db, hasher)
    await guard.add(AccountId(user.id), BookId(book.id), 5, "first")

    async def _never_found(self, account_id, book_id):
        return None

    monkeypatch.setattr(ReviewGuard, "_existing", _never_found)
    with pytest.raises(DuplicateReviewError):
        await guard.add(AccountId(user.id), BookId(book.id), 1, "second")
    assert await _review_count(test_session_factory, book.id) == 1


async def test_service_missing_account(test_db, hasher, make_book):
    book = await make_book("Dune")
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await _guard(test_db, hasher).add(AccountId(999), BookId(book.id), 3, None)
    assert exc_info.value.resource_type == "Account"
