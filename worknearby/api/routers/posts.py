"""/api/posts: create listings and search them by distance."""

from fastapi import APIRouter, Depends, Query

from worknearby.api.deps import (
    get_app_settings,
    get_listing_service,
    get_nearby_service,
    resolve_radius_km,
)
from worknearby.core.config import Settings
from worknearby.schemas.common import ErrorResponse, SuccessResponse
from worknearby.schemas.listing import ListingCreateRequest, ListingNearbyItem
from worknearby.services.listings import ListingService
from worknearby.services.nearby import NearbyService

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post(
    "",
    response_model=SuccessResponse,
    summary="Create a listing",
    description="Listings are append-only; reusing an `id` is a conflict.",
    responses={
        400: {"model": ErrorResponse, "description": "invalid listing"},
        409: {"model": ErrorResponse, "description": "listing id already exists"},
        422: {"model": ErrorResponse, "description": "validation error"},
        503: {"model": ErrorResponse, "description": "storage unavailable"},
    },
)
async def create_post(
    payload: ListingCreateRequest,
    svc: ListingService = Depends(get_listing_service),
):
    await svc.post(payload)
    return SuccessResponse(success=True)


@router.get(
    "/nearby",
    response_model=list[ListingNearbyItem],
    summary="Listings near a coordinate",
    description=(
        "Listings strictly closer than `radius` km (default 50), ordered by haversine "
        "distance then id. Each item carries the owner's current name and `distance`."
    ),
    responses={422: {"model": ErrorResponse, "description": "validation error"}},
)
async def posts_nearby(
    lat: float = Query(..., ge=-90.0, le=90.0, description="Latitude (-90..90)"),
    lng: float = Query(..., ge=-180.0, le=180.0, description="Longitude (-180..180)"),
    radius: float | None = Query(None, gt=0.0, description="Search radius in km"),
    q: str | None = Query(None, max_length=100, description="Title/category substring"),
    category: str | None = Query(None, max_length=64, description="Exact category, 'All' for any"),
    settings: Settings = Depends(get_app_settings),
    svc: NearbyService = Depends(get_nearby_service),
):
    return await svc.listings(
        lat=lat,
        lng=lng,
        radius_km=resolve_radius_km(radius, settings),
        q=q,
        category=category,
    )
