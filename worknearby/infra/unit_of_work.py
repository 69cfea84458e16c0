"""Unit of Work wrapping one session per store operation."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from worknearby.repositories.interfaces import ListingRepository, ParticipantRepository
from worknearby.repositories.sqlalchemy import (
    SqlAlchemyListingRepository,
    SqlAlchemyParticipantRepository,
)


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    participants: ParticipantRepository
    listings: ListingRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits on clean exit, rolls back when the block raises."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self.participants: ParticipantRepository
        self.listings: ListingRepository

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        session = self._session_factory()
        self._session = session
        self.participants = SqlAlchemyParticipantRepository(session)
        self.listings = SqlAlchemyListingRepository(session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is None:
            return
        try:
            if exc_type:
                await self._session.rollback()
            else:
                await self._session.commit()
        finally:
            await self._session.close()
            self._session = None
