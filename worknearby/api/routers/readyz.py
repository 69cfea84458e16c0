from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from worknearby.api.deps import get_health_service
from worknearby.core.exceptions import StorageError
from worknearby.schemas.common import OkResponse
from worknearby.services.health import HealthService

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="Runs SELECT 1 through the store; 503 when storage is unreachable.",
)
async def readyz(svc: HealthService = Depends(get_health_service)):
    try:
        return await svc.ok()
    except StorageError as exc:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": {"code": "storage_unavailable", "message": str(exc)}},
        )
