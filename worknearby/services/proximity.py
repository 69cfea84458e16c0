"""Radius filter and distance ranking over candidate rows."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, NamedTuple, Protocol

from worknearby.core.exceptions import ValidationError
from worknearby.utils.geo import distance_km

DEFAULT_RADIUS_KM = 50.0


class Locatable(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def lat(self) -> float | None: ...

    @property
    def lng(self) -> float | None: ...


class Match(NamedTuple):
    candidate: Any
    distance_km: float


def nearby(
    origin_lat: float,
    origin_lng: float,
    candidates: Iterable[Locatable],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> list[Match]:
    """Candidates strictly closer than ``radius_km``, nearest first.

    Candidates without a location are skipped. Equal distances are ordered by
    candidate id. Nothing within range yields an empty list.
    """
    radius = float(radius_km)
    if not math.isfinite(radius) or radius < 0:
        raise ValidationError("radius must be a finite, non-negative number of km")

    matches: list[Match] = []
    for candidate in candidates:
        if candidate.lat is None or candidate.lng is None:
            continue
        d = distance_km(origin_lat, origin_lng, candidate.lat, candidate.lng)
        # boundary is exclusive
        if d < radius:
            matches.append(Match(candidate, d))

    matches.sort(key=lambda m: (m.distance_km, str(m.candidate.id)))
    return matches


__all__ = ["DEFAULT_RADIUS_KM", "Locatable", "Match", "nearby"]
