from __future__ import annotations

from datetime import datetime

import pytest

from worknearby.repositories.interfaces import ListingRow, OwnedListing, ParticipantRow
from worknearby.services.nearby import NearbyService

ORIGIN = (40.7128, -74.0060)


class FakeStore:
    def __init__(self, participants=None, listings=None):
        self.participants = participants or []
        self.listings = listings or []
        self.roles_queried: list[str] = []

    async def query_participants_by_role(self, role):
        self.roles_queried.append(getattr(role, "value", role))
        return list(self.participants)

    async def query_listings_with_owner_name(self):
        return list(self.listings)


def _worker(pid: str, name: str, lat: float, lng: float) -> ParticipantRow:
    return ParticipantRow(
        id=pid, name=name, role="worker", lat=lat, lng=lng, last_active=datetime(2025, 3, 1, 9, 30)
    )


def _listing(lid: str, title: str, category: str, lat: float, lng: float, owner: str | None):
    row = ListingRow(
        id=lid,
        owner_id="u-" + lid,
        title=title,
        description="",
        category=category,
        lat=lat,
        lng=lng,
        created_at=datetime(2025, 3, 2, 8, 0),
    )
    return OwnedListing(row, owner)


@pytest.mark.asyncio
async def test_workers_are_ranked_and_serialized():
    store = FakeStore(
        participants=[
            _worker("w2", "Bea", 40.7357, -74.1724),
            _worker("w1", "Ana", *ORIGIN),
            _worker("w3", "Cy", 34.0522, -118.2437),
        ]
    )
    items = await NearbyService(store).workers(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=50)

    assert store.roles_queried == ["worker"]
    assert [i.id for i in items] == ["w1", "w2"]
    assert items[0].distance == 0.0
    assert items[0].last_active == "2025-03-01T09:30:00"
    assert items[1].distance == pytest.approx(14.1, abs=0.5)


@pytest.mark.asyncio
async def test_workers_name_filter_is_case_insensitive():
    store = FakeStore(
        participants=[_worker("w1", "Ana Lopez", *ORIGIN), _worker("w2", "Bea", *ORIGIN)]
    )
    items = await NearbyService(store).workers(
        lat=ORIGIN[0], lng=ORIGIN[1], radius_km=10, q="  LOPEZ "
    )
    assert [i.id for i in items] == ["w1"]


@pytest.mark.asyncio
async def test_listings_keep_missing_owner_name():
    store = FakeStore(listings=[_listing("p1", "Walk dog", "General", *ORIGIN, owner=None)])
    [item] = await NearbyService(store).listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5)

    assert item.user_name is None
    assert item.user_id == "u-p1"
    assert item.created_at == "2025-03-02T08:00:00"


@pytest.mark.asyncio
async def test_listings_category_filter():
    store = FakeStore(
        listings=[
            _listing("p1", "Walk dog", "General", *ORIGIN, owner="Ana"),
            _listing("p2", "Courier run", "Delivery", *ORIGIN, owner="Bea"),
        ]
    )
    svc = NearbyService(store)

    only_delivery = await svc.listings(
        lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5, category="delivery"
    )
    assert [i.id for i in only_delivery] == ["p2"]

    everything = await svc.listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5, category="All")
    assert [i.id for i in everything] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_listings_text_filter_matches_title_or_category():
    store = FakeStore(
        listings=[
            _listing("p1", "Walk dog", "General", *ORIGIN, owner="Ana"),
            _listing("p2", "Courier run", "Delivery", *ORIGIN, owner="Bea"),
            _listing("p3", "Fix laptop", "Technical", *ORIGIN, owner="Cy"),
        ]
    )
    svc = NearbyService(store)

    by_title = await svc.listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5, q="dog")
    assert [i.id for i in by_title] == ["p1"]

    by_category = await svc.listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5, q="techn")
    assert [i.id for i in by_category] == ["p3"]

    blank = await svc.listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=5, q="   ")
    assert len(blank) == 3


@pytest.mark.asyncio
async def test_nothing_nearby_is_empty_not_error():
    store = FakeStore(listings=[_listing("p1", "Far", "General", 34.0522, -118.2437, owner="Ana")])
    assert await NearbyService(store).listings(lat=ORIGIN[0], lng=ORIGIN[1], radius_km=50) == []
