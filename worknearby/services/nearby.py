"""Nearby workers / listings: store reads, optional filters, then ranking."""

from __future__ import annotations

import structlog

from worknearby.models.participant import ParticipantRole
from worknearby.repositories.interfaces import OwnedListing, ParticipantRow
from worknearby.schemas.listing import ListingNearbyItem
from worknearby.schemas.participant import WorkerNearbyItem
from worknearby.services.proximity import Match, nearby
from worknearby.store import LocationStore
from worknearby.utils.datetime import to_iso

ALL_CATEGORIES = "all"


def _needle(q: str | None) -> str | None:
    if q is None:
        return None
    q = q.strip().lower()
    return q or None


def _worker_item(match: Match) -> WorkerNearbyItem:
    p: ParticipantRow = match.candidate
    return WorkerNearbyItem(
        id=p.id,
        name=p.name,
        role=p.role,
        lat=float(p.lat),
        lng=float(p.lng),
        last_active=to_iso(p.last_active),
        distance=match.distance_km,
    )


def _listing_item(match: Match) -> ListingNearbyItem:
    owned: OwnedListing = match.candidate
    listing = owned.listing
    return ListingNearbyItem(
        id=listing.id,
        user_id=listing.owner_id,
        user_name=owned.owner_name,
        title=listing.title,
        description=listing.description,
        category=listing.category,
        lat=listing.lat,
        lng=listing.lng,
        created_at=to_iso(listing.created_at),
        distance=match.distance_km,
    )


class NearbyService:
    def __init__(self, store: LocationStore) -> None:
        self._store = store

    async def workers(
        self,
        *,
        lat: float,
        lng: float,
        radius_km: float,
        q: str | None = None,
    ) -> list[WorkerNearbyItem]:
        candidates = await self._store.query_participants_by_role(ParticipantRole.worker)
        needle = _needle(q)
        if needle:
            candidates = [c for c in candidates if needle in c.name.lower()]

        matches = nearby(lat, lng, candidates, radius_km)
        structlog.get_logger(__name__).info(
            "workers_nearby",
            lat=float(lat),
            lng=float(lng),
            radius_km=float(radius_km),
            candidates=len(candidates),
            returned=len(matches),
        )
        return [_worker_item(m) for m in matches]

    async def listings(
        self,
        *,
        lat: float,
        lng: float,
        radius_km: float,
        q: str | None = None,
        category: str | None = None,
    ) -> list[ListingNearbyItem]:
        candidates = await self._store.query_listings_with_owner_name()

        wanted = _needle(category)
        if wanted and wanted != ALL_CATEGORIES:
            candidates = [c for c in candidates if c.listing.category.lower() == wanted]

        needle = _needle(q)
        if needle:
            # title or category substring
            candidates = [
                c
                for c in candidates
                if needle in c.listing.title.lower() or needle in c.listing.category.lower()
            ]

        matches = nearby(lat, lng, candidates, radius_km)
        structlog.get_logger(__name__).info(
            "listings_nearby",
            lat=float(lat),
            lng=float(lng),
            radius_km=float(radius_km),
            category=category,
            candidates=len(candidates),
            returned=len(matches),
        )
        return [_listing_item(m) for m in matches]
