from __future__ import annotations

import structlog

from worknearby.repositories.interfaces import ListingRow
from worknearby.schemas.listing import ListingCreateRequest
from worknearby.store import LocationStore


class ListingService:
    def __init__(self, store: LocationStore) -> None:
        self._store = store

    async def post(self, payload: ListingCreateRequest) -> ListingRow:
        row = await self._store.insert_listing(
            payload.id,
            payload.user_id,
            payload.title,
            payload.description,
            payload.category,
            payload.lat,
            payload.lng,
        )
        structlog.get_logger(__name__).info(
            "listing_posted", listing_id=row.id, owner_id=row.owner_id, category=row.category
        )
        return row
