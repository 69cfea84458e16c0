from __future__ import annotations

from worknearby.store import LocationStore


class HealthService:
    def __init__(self, store: LocationStore):
        self._store = store

    async def ok(self) -> dict:
        await self._store.ping()
        return {"ok": True}
