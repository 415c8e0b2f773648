"""Store Routes — store CRUD views, stock listing and stock assignment."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from bookstore.api.deps import get_store_service
from bookstore.core.domain_types import BookId, StoreId
from bookstore.core.errors import ResourceNotFoundError
from bookstore.schemas.store import AssignBookToStore, StockedBook, StoreCreate, StoreDetails
from bookstore.schemas.summaries import StoreSummary
from bookstore.services.store_service import StoreService

router = APIRouter(prefix="/api/stores", tags=["stores"])


@router.get("", response_model=list[StoreSummary])
async def list_stores(service: StoreService = Depends(get_store_service)):
    return (await service.get_all()).unwrap()


@router.get("/{store_id}", response_model=StoreDetails)
async def get_store(store_id: UUID, service: StoreService = Depends(get_store_service)):
    store = (await service.get_by_id(StoreId(store_id))).unwrap()
    if store is None:
        raise ResourceNotFoundError("Store", str(store_id))
    return store


@router.get("/{store_id}/books", response_model=list[StockedBook])
async def list_store_books(
    store_id: UUID, service: StoreService = Depends(get_store_service),
):
    return (await service.get_books(StoreId(store_id))).unwrap()


@router.post("", response_model=StoreSummary, status_code=status.HTTP_201_CREATED)
async def create_store(body: StoreCreate, service: StoreService = Depends(get_store_service)):
    return (await service.create(body.name, body.location)).unwrap()


@router.post("/assign-book", response_model=StoreDetails)
async def assign_book(
    body: AssignBookToStore, service: StoreService = Depends(get_store_service),
):
    """Stock a book at a store, or overwrite its quantity if already stocked."""
    result = await service.assign_book(body.store_id, body.book_id, body.quantity)
    return result.unwrap()


@router.delete("/{store_id}/books/{book_id}", response_model=StoreDetails)
async def remove_book(
    store_id: UUID, book_id: UUID, service: StoreService = Depends(get_store_service),
):
    return (await service.remove_book(StoreId(store_id), BookId(book_id))).unwrap()
