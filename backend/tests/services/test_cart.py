"""Cart Aggregator — merge semantics over HTTP and directly against the service.

Tests cover:
    - repeated adds of the same book merge into one line (2 + 3 = 5)
    - a line inserted out-of-band is merged into, not duplicated
    - update/remove on a missing line → 404; quantity < 1 → 400
    - carts are per account and never see each other's lines
"""

import pytest
from sqlalchemy import func, select

from bookstore.core.domain_types import AccountId, BookId, CartEntry
from bookstore.core.errors import ResourceNotFoundError, ValidationError
from bookstore.models.cart_item import CartItem
from bookstore.services.cart import CartAggregator


async def _row_count(session_factory, account_id, book_id) -> int:
    async with session_factory() as db:
        return await db.scalar(
            select(func.count(CartItem.id))
            .where(CartItem.account_id == account_id)
            .where(CartItem.book_id == book_id),
        )


async def test_cart_requires_token(client):
    resp = await client.get("/api/v1/cart")
    assert resp.status_code == 401


async def test_repeated_add_merges(client, user, auth_headers, test_session_factory):
    headers = auth_headers(user.id)
    first = await client.post(
        "/api/v1/cart/items", json={"book_id": 7, "quantity": 2}, headers=headers,
    )
    assert first.status_code == 200
    assert first.json() == {"book_id": 7, "quantity": 2}

    second = await client.post(
        "/api/v1/cart/items", json={"book_id": 7, "quantity": 3}, headers=headers,
    )
    assert second.json() == {"book_id": 7, "quantity": 5}

    cart = await client.get("/api/v1/cart", headers=headers)
    assert cart.json() == {
        "items": [{"book_id": 7, "quantity": 5}], "total_quantity": 5,
    }
    assert await _row_count(test_session_factory, user.id, 7) == 1


async def test_add_defaults_to_one(client, user, auth_headers):
    resp = await client.post(
        "/api/v1/cart/items", json={"book_id": 3}, headers=auth_headers(user.id),
    )
    assert resp.json()["quantity"] == 1


async def test_add_merges_into_out_of_band_row(
    client, user, auth_headers, test_session_factory,
):
    async with test_session_factory() as db:
        db.add(CartItem(account_id=user.id, book_id=11, quantity=4))
        await db.commit()

    resp = await client.post(
        "/api/v1/cart/items", json={"book_id": 11, "quantity": 1},
        headers=auth_headers(user.id),
    )
    assert resp.json()["quantity"] == 5
    assert await _row_count(test_session_factory, user.id, 11) == 1


async def test_add_zero_quantity_is_400(client, user, auth_headers):
    resp = await client.post(
        "/api/v1/cart/items", json={"book_id": 7, "quantity": 0},
        headers=auth_headers(user.id),
    )
    assert resp.status_code == 400


async def test_update_replaces_quantity(client, user, auth_headers):
    headers = auth_headers(user.id)
    await client.post("/api/v1/cart/items", json={"book_id": 7, "quantity": 2}, headers=headers)
    resp = await client.put(
        "/api/v1/cart/items/7", json={"quantity": 9}, headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 9


async def test_update_missing_line_is_404(client, user, auth_headers):
    resp = await client.put(
        "/api/v1/cart/items/42", json={"quantity": 1}, headers=auth_headers(user.id),
    )
    assert resp.status_code == 404


async def test_update_zero_is_400(client, user, auth_headers):
    headers = auth_headers(user.id)
    await client.post("/api/v1/cart/items", json={"book_id": 7}, headers=headers)
    resp = await client.put("/api/v1/cart/items/7", json={"quantity": 0}, headers=headers)
    assert resp.status_code == 400


async def test_remove_then_empty(client, user, auth_headers):
    headers = auth_headers(user.id)
    await client.post("/api/v1/cart/items", json={"book_id": 7, "quantity": 2}, headers=headers)
    resp = await client.delete("/api/v1/cart/items/7", headers=headers)
    assert resp.status_code == 200

    cart = await client.get("/api/v1/cart", headers=headers)
    assert cart.json() == {"items": [], "total_quantity": 0}

    again = await client.delete("/api/v1/cart/items/7", headers=headers)
    assert again.status_code == 404


async def test_carts_are_per_account(client, user, admin, auth_headers):
    await client.post(
        "/api/v1/cart/items", json={"book_id": 7, "quantity": 2},
        headers=auth_headers(user.id),
    )
    other = await client.get("/api/v1/cart", headers=auth_headers(admin.id))
    assert other.json()["items"] == []
    resp = await client.delete("/api/v1/cart/items/7", headers=auth_headers(admin.id))
    assert resp.status_code == 404


# ─── Service level ───────────────────────────────────────────────


async def test_service_add_merges(test_db, user):
    cart = CartAggregator(test_db)
    await cart.add(AccountId(user.id), BookId(2), 2)
    entry = await cart.add(AccountId(user.id), BookId(2), 3)
    assert entry == CartEntry(user.id, 2, 5)
    assert await cart.entries(AccountId(user.id)) == [CartEntry(user.id, 2, 5)]


async def test_service_rejects_bad_quantity(test_db, user):
    cart = CartAggregator(test_db)
    with pytest.raises(ValidationError):
        await cart.add(AccountId(user.id), BookId(2), -1)


async def test_service_overflow_leaves_line_unchanged(test_db, user):
    cart = CartAggregator(test_db)
    await cart.add(AccountId(user.id), BookId(2), 9_999)
    with pytest.raises(ValidationError):
        await cart.add(AccountId(user.id), BookId(2), 5)
    assert await cart.entries(AccountId(user.id)) == [CartEntry(user.id, 2, 9_999)]


async def test_service_remove_missing(test_db, user):
    with pytest.raises(ResourceNotFoundError):
        await CartAggregator(test_db).remove(AccountId(user.id), BookId(99))


@pytest.mark.parametrize("book_id", [2**31, 2**70])
async def test_add_oversized_book_id_is_400(client, user, auth_headers, book_id):
    resp = await client.post(
        "/api/v1/cart/items", json={"book_id": book_id, "quantity": 1},
        headers=auth_headers(user.id),
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"


async def test_oversized_path_book_id_is_400(client, user, auth_headers):
    headers = auth_headers(user.id)
    update = await client.put(
        f"/api/v1/cart/items/{2**70}", json={"quantity": 1}, headers=headers,
    )
    assert update.status_code == 400
    remove = await client.delete("/api/v1/cart/items/3000000000", headers=headers)
    assert remove.status_code == 400
