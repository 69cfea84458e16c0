"""Repository abstractions and the plain rows they hand back to callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Protocol


@dataclass(frozen=True)
class ParticipantRow:
    id: str
    name: str
    role: str
    lat: float | None
    lng: float | None
    last_active: datetime | None


@dataclass(frozen=True)
class ListingRow:
    id: str
    owner_id: str
    title: str
    description: str
    category: str
    lat: float
    lng: float
    created_at: datetime | None


class OwnedListing(NamedTuple):
    """A listing paired with its owner's current name (None when the owner is gone)."""

    listing: ListingRow
    owner_name: str | None

    @property
    def id(self) -> str:
        return self.listing.id

    @property
    def lat(self) -> float:
        return self.listing.lat

    @property
    def lng(self) -> float:
        return self.listing.lng


class ParticipantRepository(Protocol):
    async def upsert(
        self,
        *,
        id: str,
        name: str,
        role: str,
        lat: float | None,
        lng: float | None,
        last_active: datetime,
    ) -> ParticipantRow: ...

    async def list_located_by_role(self, role: str) -> list[ParticipantRow]: ...


class ListingRepository(Protocol):
    async def exists(self, listing_id: str) -> bool: ...

    async def add(
        self,
        *,
        id: str,
        owner_id: str,
        title: str,
        description: str,
        category: str,
        lat: float,
        lng: float,
        created_at: datetime,
    ) -> ListingRow: ...

    async def list_with_owner_name(self) -> list[OwnedListing]: ...
