"""API dependency helpers and service providers."""

from __future__ import annotations

from fastapi import Depends, Request

from worknearby.core.config import Settings
from worknearby.services.health import HealthService
from worknearby.services.listings import ListingService
from worknearby.services.nearby import NearbyService
from worknearby.services.participants import ParticipantService
from worknearby.store import LocationStore

__all__ = [
    "get_store",
    "get_app_settings",
    "resolve_radius_km",
    "get_participant_service",
    "get_listing_service",
    "get_nearby_service",
    "get_health_service",
]


def get_store(request: Request) -> LocationStore:
    """The store opened by the application lifespan."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def resolve_radius_km(radius: float | None, settings: Settings) -> float:
    return float(radius) if radius is not None else settings.default_radius_km


# --- Service providers for DI ---


def get_participant_service(store: LocationStore = Depends(get_store)) -> ParticipantService:
    return ParticipantService(store)


def get_listing_service(store: LocationStore = Depends(get_store)) -> ListingService:
    return ListingService(store)


def get_nearby_service(store: LocationStore = Depends(get_store)) -> NearbyService:
    return NearbyService(store)


def get_health_service(store: LocationStore = Depends(get_store)) -> HealthService:
    return HealthService(store)
