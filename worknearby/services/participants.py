from __future__ import annotations

import structlog

from worknearby.repositories.interfaces import ParticipantRow
from worknearby.schemas.participant import ParticipantUpsertRequest
from worknearby.store import LocationStore


class ParticipantService:
    def __init__(self, store: LocationStore) -> None:
        self._store = store

    async def join(self, payload: ParticipantUpsertRequest) -> ParticipantRow:
        row = await self._store.upsert_participant(
            payload.id, payload.name, payload.role, payload.lat, payload.lng
        )
        structlog.get_logger(__name__).info(
            "participant_joined",
            participant_id=row.id,
            role=row.role,
            located=row.lat is not None,
        )
        return row
