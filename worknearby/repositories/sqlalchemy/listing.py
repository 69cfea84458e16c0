"""SQLAlchemy listing repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from worknearby.models.listing import Listing
from worknearby.models.participant import Participant
from worknearby.repositories.interfaces import ListingRepository, ListingRow, OwnedListing


def _to_row(obj: Listing) -> ListingRow:
    return ListingRow(
        id=obj.id,
        owner_id=obj.owner_id,
        title=obj.title,
        description=obj.description or "",
        category=obj.category,
        lat=float(obj.lat),
        lng=float(obj.lng),
        created_at=obj.created_at,
    )


class SqlAlchemyListingRepository(ListingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, listing_id: str) -> bool:
        return (await self._session.get(Listing, listing_id)) is not None

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
    ) -> ListingRow:
        obj = Listing(
            id=id,
            owner_id=owner_id,
            title=title,
            description=description,
            category=category,
            lat=lat,
            lng=lng,
            created_at=created_at,
        )
        self._session.add(obj)
        await self._session.flush()
        return _to_row(obj)

    async def list_with_owner_name(self) -> list[OwnedListing]:
        # Outer join: dangling owner ids yield owner_name=None
        stmt = select(Listing, Participant.name).outerjoin(
            Participant, Participant.id == Listing.owner_id
        )
        rows = (await self._session.execute(stmt)).all()
        return [OwnedListing(_to_row(listing), owner_name) for listing, owner_name in rows]
