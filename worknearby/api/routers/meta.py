from fastapi import APIRouter

from worknearby.models.listing import SUGGESTED_CATEGORIES
from worknearby.schemas.common import CategoriesResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get(
    "/categories",
    response_model=CategoriesResponse,
    summary="Suggested listing categories",
    description="Hints for clients; the store accepts any category text.",
)
async def categories():
    return CategoriesResponse(categories=list(SUGGESTED_CATEGORIES))
