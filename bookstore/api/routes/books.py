"""Book Routes — paged listing, CRUD and author assignment.

Invariants:
    - PUT distinguishes an omitted authorIds/storeIds (links kept) from an
      empty list (links removed)
    - Query parameters use the camelCase names clients send
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from bookstore.api.deps import get_book_service
from bookstore.core.domain_types import AuthorId, BookFilter, BookId
from bookstore.core.errors import ResourceNotFoundError
from bookstore.schemas.book import AssignAuthorToBook, BookCreate, BookDetails, BookUpdate
from bookstore.schemas.common import PagedResult
from bookstore.schemas.summaries import BookSummary
from bookstore.services.book_service import BookService

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=PagedResult[BookSummary])
async def list_books(
    title: str | None = Query(None),
    author_name: str | None = Query(None, alias="authorName"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    sort_by: str | None = Query(None, alias="sortBy"),
    desc: bool = Query(False),
    service: BookService = Depends(get_book_service),
):
    """Filtered, sorted, offset-paged listing. Unknown sortBy falls back to title."""
    criteria = BookFilter(
        title=title, author_name=author_name, page=page,
        page_size=page_size, sort_by=sort_by, desc=desc,
    )
    return (await service.get_books_paged(criteria)).unwrap()


@router.get("/{book_id}", response_model=BookDetails)
async def get_book(book_id: UUID, service: BookService = Depends(get_book_service)):
    book = (await service.get_by_id(BookId(book_id))).unwrap()
    if book is None:
        raise ResourceNotFoundError("Book", str(book_id))
    return book


@router.post("", response_model=BookDetails, status_code=status.HTTP_201_CREATED)
async def create_book(body: BookCreate, service: BookService = Depends(get_book_service)):
    result = await service.create(
        body.isbn, body.title, body.description,
        author_ids=body.author_ids, store_ids=body.store_ids,
    )
    return result.unwrap()


@router.put("/{book_id}", response_model=BookDetails)
async def update_book(
    book_id: UUID, body: BookUpdate, service: BookService = Depends(get_book_service),
):
    result = await service.update(
        BookId(book_id), body.title, body.description,
        author_ids=body.author_ids, store_ids=body.store_ids,
    )
    return result.unwrap()


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: UUID, service: BookService = Depends(get_book_service)):
    (await service.delete(BookId(book_id))).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/assign-author", response_model=BookDetails)
async def assign_author(
    body: AssignAuthorToBook, service: BookService = Depends(get_book_service),
):
    return (await service.assign_author(body.book_id, body.author_id)).unwrap()


@router.delete("/{book_id}/authors/{author_id}", response_model=BookDetails)
async def remove_author(
    book_id: UUID, author_id: UUID, service: BookService = Depends(get_book_service),
):
    return (await service.remove_author(BookId(book_id), AuthorId(author_id))).unwrap()
