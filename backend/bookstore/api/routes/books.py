"""Book Routes — catalog reads, admin-only catalog writes, and per-book reviews.

Invariants:
    - All routes require a valid identity; create/update/delete additionally pass the RoleGate
    - A second review by the same account for the same book → 409, whatever its content
    - Reviews on a missing book → 404
"""

from fastapi import APIRouter, Depends, Path, Query

from bookstore.api.auth import require_admin, require_identity
from bookstore.api.dependencies import get_book_catalog, get_review_guard
from bookstore.core.domain_types import MAX_ID, BookId, Identity
from bookstore.schemas.account import MessageResponse
from bookstore.schemas.book import BookCreate, BookResponse, BookUpdate
from bookstore.schemas.review import ReviewCreate, ReviewResponse
from bookstore.services.books import BookCatalog
from bookstore.services.reviews import ReviewGuard

router = APIRouter(
    prefix="/api/v1/books", tags=["books"],
    dependencies=[Depends(require_identity)],
)


@router.get("")
async def list_books(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0, le=MAX_ID),
    catalog: BookCatalog = Depends(get_book_catalog),
):
    books, total = await catalog.list_books(limit, offset)
    return {
        "books": [BookResponse.model_validate(b).model_dump() for b in books],
        "pagination": {"limit": limit, "offset": offset, "total": total},
    }


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int = Path(ge=1, le=MAX_ID),
    catalog: BookCatalog = Depends(get_book_catalog),
):
    return await catalog.get(BookId(book_id))


@router.post(
    "", response_model=BookResponse, dependencies=[Depends(require_admin)],
)
async def create_book(
    body: BookCreate, catalog: BookCatalog = Depends(get_book_catalog),
):
    return await catalog.create(body)


@router.put(
    "/{book_id}", response_model=BookResponse,
    dependencies=[Depends(require_admin)],
)
async def update_book(
    body: BookUpdate,
    book_id: int = Path(ge=1, le=MAX_ID),
    catalog: BookCatalog = Depends(get_book_catalog),
):
    return await catalog.update(BookId(book_id), body)


@router.delete(
    "/{book_id}", response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_book(
    book_id: int = Path(ge=1, le=MAX_ID),
    catalog: BookCatalog = Depends(get_book_catalog),
):
    await catalog.delete(BookId(book_id))
    return MessageResponse(message="Book deleted successfully")


# ─── Reviews ─────────────────────────────────────────────────────

@router.get("/{book_id}/reviews", response_model=list[ReviewResponse])
async def list_reviews(
    book_id: int = Path(ge=1, le=MAX_ID),
    guard: ReviewGuard = Depends(get_review_guard),
):
    return await guard.list_for_book(BookId(book_id))


@router.post("/{book_id}/reviews", response_model=ReviewResponse)
async def add_review(
    body: ReviewCreate,
    book_id: int = Path(ge=1, le=MAX_ID),
    identity: Identity = Depends(require_identity),
    guard: ReviewGuard = Depends(get_review_guard),
):
    return await guard.add(
        identity.account_id, BookId(book_id), body.rating, body.comment,
    )
