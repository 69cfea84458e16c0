# worknearby/api/routers/healthz.py
from fastapi import APIRouter

from worknearby.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("", response_model=OkResponse, summary="Liveness probe")
async def healthz():
    return {"ok": True}
