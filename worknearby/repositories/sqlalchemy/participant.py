"""SQLAlchemy participant repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from worknearby.models.participant import Participant
from worknearby.repositories.interfaces import ParticipantRepository, ParticipantRow

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _to_row(p: Participant) -> ParticipantRow:
    return ParticipantRow(
        id=p.id,
        name=p.name,
        role=p.role,
        lat=p.lat,
        lng=p.lng,
        last_active=p.last_active,
    )


class SqlAlchemyParticipantRepository(ParticipantRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(
        self,
        *,
        id: str,
        name: str,
        role: str,
        lat: float | None,
        lng: float | None,
        last_active: datetime,
    ) -> ParticipantRow:
        """Insert or replace the row keyed by ``id`` in a single statement."""
        values = {
            "id": id,
            "name": name,
            "role": role,
            "lat": lat,
            "lng": lng,
            "last_active": last_active,
        }
        insert = _UPSERT_INSERTS.get(self._session.bind.dialect.name)
        if insert is None:
            # Other dialects: select-then-write, still within the caller's lock
            await self._session.merge(Participant(**values))
            await self._session.flush()
        else:
            stmt = insert(Participant).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["id"],
                set_={key: stmt.excluded[key] for key in values if key != "id"},
            )
            await self._session.execute(stmt)
        return ParticipantRow(**values)

    async def list_located_by_role(self, role: str) -> list[ParticipantRow]:
        stmt = select(Participant).where(
            Participant.role == role,
            Participant.lat.is_not(None),
            Participant.lng.is_not(None),
        )
        return [_to_row(p) for p in (await self._session.scalars(stmt)).all()]
