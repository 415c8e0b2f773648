"""Seed Route — populate an empty catalog from the configured seed file.

Invariants:
    - Any seed failure answers 500, whatever the failure kind
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bookstore.api.deps import get_seed_service
from bookstore.services.seed_service import SeedService

router = APIRouter(prefix="/api/database", tags=["database"])


@router.get("/seed")
async def seed_database(service: SeedService = Depends(get_seed_service)):
    result = await service.seed()
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.error.to_response(),
        )
    return {"message": result.value}
