"""Author Routes — list, fetch and create authors."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from bookstore.api.deps import get_author_service
from bookstore.core.domain_types import AuthorId
from bookstore.core.errors import ResourceNotFoundError
from bookstore.schemas.author import AuthorCreate
from bookstore.schemas.summaries import AuthorSummary
from bookstore.services.author_service import AuthorService

router = APIRouter(prefix="/api/authors", tags=["authors"])


@router.get("", response_model=list[AuthorSummary])
async def list_authors(service: AuthorService = Depends(get_author_service)):
    return (await service.get_all()).unwrap()


@router.get("/{author_id}", response_model=AuthorSummary)
async def get_author(
    author_id: UUID, service: AuthorService = Depends(get_author_service),
):
    author = (await service.get_by_id(AuthorId(author_id))).unwrap()
    if author is None:
        raise ResourceNotFoundError("Author", str(author_id))
    return author


@router.post("", response_model=AuthorSummary, status_code=status.HTTP_201_CREATED)
async def create_author(
    body: AuthorCreate, service: AuthorService = Depends(get_author_service),
):
    return (await service.create(body.first_name, body.last_name)).unwrap()
