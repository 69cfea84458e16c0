"""Location store: validated persistence of participants and listings.

The store is an explicitly constructed object. Open it once at process start
with :meth:`LocationStore.open` and release it with :meth:`LocationStore.close`.
Every operation runs in its own unit of work, so each upsert or insert is a
single atomic write. Upserts for the same participant id are serialized by a
striped in-process lock, which makes them linearizable per id: the last
writer's data and timestamp win. On an in-memory SQLite database every
session shares one connection, so the store runs operations there one at a
time.

The store raises typed errors from :mod:`worknearby.core.exceptions` and never
logs.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool

from worknearby.core.exceptions import ConflictError, StorageError, ValidationError
from worknearby.db import create_engine, create_session_factory
from worknearby.infra.unit_of_work import SqlAlchemyUnitOfWork
from worknearby.models import CATEGORY_MAX_LENGTH, DEFAULT_CATEGORY, Base, ParticipantRole
from worknearby.repositories.interfaces import ListingRow, OwnedListing, ParticipantRow
from worknearby.utils.datetime import utcnow

_LOCK_STRIPES = 64


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value.strip()


def _require_id(value: Any, field: str) -> str:
    # ids are opaque: reject blanks but keep the value as given
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value


def _coerce_role(role: ParticipantRole | str) -> str:
    try:
        return ParticipantRole(role).value
    except ValueError:
        allowed = ", ".join(r.value for r in ParticipantRole)
        raise ValidationError(f"role must be one of: {allowed}") from None


def _coordinate(value: Any, field: str, bound: float) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number") from None
    # NaN fails the comparison as well
    if not -bound <= number <= bound:
        raise ValidationError(f"{field} must be within [-{bound:g}, {bound:g}]")
    return number


def _coordinates(lat: Any, lng: Any, *, required: bool) -> tuple[float | None, float | None]:
    if lat is None and lng is None:
        if required:
            raise ValidationError("lat and lng are required")
        return None, None
    if lat is None or lng is None:
        raise ValidationError("lat and lng must be given together")
    return _coordinate(lat, "lat", 90.0), _coordinate(lng, "lng", 180.0)


class LocationStore:
    def __init__(
        self,
        engine: AsyncEngine,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._clock = clock
        self._locks = [asyncio.Lock() for _ in range(_LOCK_STRIPES)]
        # A StaticPool hands every session the same connection, hence the same
        # transaction; operations on it must not interleave.
        self._connection_lock = (
            asyncio.Lock() if isinstance(engine.sync_engine.pool, StaticPool) else None
        )

    @classmethod
    def open(
        cls, database_url: str | None = None, *, clock: Callable[[], datetime] = utcnow
    ) -> LocationStore:
        return cls(create_engine(database_url), clock=clock)

    async def close(self) -> None:
        await self._engine.dispose()

    async def create_schema(self) -> None:
        try:
            async with self._exclusive(), self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StorageError("failed to create schema") from exc

    async def ping(self) -> None:
        try:
            async with self._exclusive(), self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StorageError("storage is unreachable") from exc

    def _uow(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)

    def _lock_for(self, key: str) -> asyncio.Lock:
        return self._locks[hash(key) % len(self._locks)]

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        if self._connection_lock is None:
            yield
            return
        async with self._connection_lock:
            yield

    # --- writes ---

    async def upsert_participant(
        self,
        id: str,
        name: str,
        role: ParticipantRole | str,
        lat: float | None = None,
        lng: float | None = None,
    ) -> ParticipantRow:
        """Insert or replace the participant keyed by ``id``; stamps ``last_active``."""
        participant_id = _require_id(id, "id")
        display_name = _require_text(name, "name")
        role_value = _coerce_role(role)
        lat_value, lng_value = _coordinates(lat, lng, required=False)

        async with self._lock_for(f"participant:{participant_id}"), self._exclusive():
            try:
                async with self._uow() as uow:
                    return await uow.participants.upsert(
                        id=participant_id,
                        name=display_name,
                        role=role_value,
                        lat=lat_value,
                        lng=lng_value,
                        last_active=self._clock(),
                    )
            except SQLAlchemyError as exc:
                raise StorageError(f"failed to upsert participant {participant_id!r}") from exc

    async def insert_listing(
        self,
        id: str,
        owner_id: str,
        title: str,
        description: str | None,
        category: str | None,
        lat: float,
        lng: float,
    ) -> ListingRow:
        """Append a new listing. A duplicate ``id`` raises :class:`ConflictError`.

        ``owner_id`` is not checked against existing participants.
        """
        listing_id = _require_id(id, "id")
        owner = _require_id(owner_id, "owner_id")
        listing_title = _require_text(title, "title")
        lat_value, lng_value = _coordinates(lat, lng, required=True)
        category_value = (category or "").strip() or DEFAULT_CATEGORY
        if len(category_value) > CATEGORY_MAX_LENGTH:
            raise ValidationError(f"category must be at most {CATEGORY_MAX_LENGTH} characters")

        async with self._lock_for(f"listing:{listing_id}"), self._exclusive():
            try:
                async with self._uow() as uow:
                    if await uow.listings.exists(listing_id):
                        raise ConflictError(f"listing {listing_id!r} already exists")
                    return await uow.listings.add(
                        id=listing_id,
                        owner_id=owner,
                        title=listing_title,
                        description=description or "",
                        category=category_value,
                        lat=lat_value,
                        lng=lng_value,
                        created_at=self._clock(),
                    )
            except IntegrityError as exc:
                # Lost a race with another process inserting the same id
                raise ConflictError(f"listing {listing_id!r} already exists") from exc
            except SQLAlchemyError as exc:
                raise StorageError(f"failed to insert listing {listing_id!r}") from exc

    # --- reads ---

    async def query_participants_by_role(self, role: ParticipantRole | str) -> list[ParticipantRow]:
        """Participants with ``role`` and a known location, in no particular order."""
        role_value = _coerce_role(role)
        try:
            async with self._exclusive(), self._uow() as uow:
                return await uow.participants.list_located_by_role(role_value)
        except SQLAlchemyError as exc:
            raise StorageError("failed to query participants") from exc

    async def query_listings_with_owner_name(self) -> list[OwnedListing]:
        """Every listing with its owner's current name, or None when unresolvable."""
        try:
            async with self._exclusive(), self._uow() as uow:
                return await uow.listings.list_with_owner_name()
        except SQLAlchemyError as exc:
            raise StorageError("failed to query listings") from exc


__all__ = ["LocationStore"]
