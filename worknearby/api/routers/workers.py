"""/api/workers: workers near a coordinate."""

from fastapi import APIRouter, Depends, Query

from worknearby.api.deps import get_app_settings, get_nearby_service, resolve_radius_km
from worknearby.core.config import Settings
from worknearby.schemas.common import ErrorResponse
from worknearby.schemas.participant import WorkerNearbyItem
from worknearby.services.nearby import NearbyService

router = APIRouter(prefix="/api/workers", tags=["workers"])


@router.get(
    "/nearby",
    response_model=list[WorkerNearbyItem],
    summary="Workers near a coordinate",
    description=(
        "Workers with a known location strictly closer than `radius` km (default 50), "
        "ordered by haversine distance then id."
    ),
    responses={422: {"model": ErrorResponse, "description": "validation error"}},
)
async def workers_nearby(
    lat: float = Query(..., ge=-90.0, le=90.0, description="Latitude (-90..90)"),
    lng: float = Query(..., ge=-180.0, le=180.0, description="Longitude (-180..180)"),
    radius: float | None = Query(None, gt=0.0, description="Search radius in km"),
    q: str | None = Query(None, max_length=100, description="Name substring"),
    settings: Settings = Depends(get_app_settings),
    svc: NearbyService = Depends(get_nearby_service),
):
    return await svc.workers(
        lat=lat, lng=lng, radius_km=resolve_radius_km(radius, settings), q=q
    )
