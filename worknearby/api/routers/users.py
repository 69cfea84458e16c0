"""/api/users: join or refresh a participant."""

from fastapi import APIRouter, Depends

from worknearby.api.deps import get_participant_service
from worknearby.schemas.common import ErrorResponse, SuccessResponse
from worknearby.schemas.participant import ParticipantUpsertRequest
from worknearby.services.participants import ParticipantService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=SuccessResponse,
    summary="Create or replace a participant",
    description=(
        "Upserts by `id`: an existing participant with the same id is replaced and its "
        "`last_active` timestamp is refreshed."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "invalid participant"},
        422: {"model": ErrorResponse, "description": "validation error"},
        503: {"model": ErrorResponse, "description": "storage unavailable"},
    },
)
async def upsert_user(
    payload: ParticipantUpsertRequest,
    svc: ParticipantService = Depends(get_participant_service),
):
    await svc.join(payload)
    return SuccessResponse(success=True)
