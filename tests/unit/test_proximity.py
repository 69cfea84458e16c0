from dataclasses import dataclass

import pytest

from worknearby.core.exceptions import ValidationError
from worknearby.services.proximity import DEFAULT_RADIUS_KM, Match, nearby
from worknearby.utils.geo import distance_km

pytestmark = pytest.mark.unit

NEW_YORK = (40.7128, -74.0060)


@dataclass(frozen=True)
class Spot:
    id: str
    lat: float | None
    lng: float | None


def _ids(matches: list[Match]) -> list[str]:
    return [m.candidate.id for m in matches]


CANDIDATES = [
    Spot("here", 40.7128, -74.0060),
    Spot("brooklyn", 40.6782, -73.9442),
    Spot("newark", 40.7357, -74.1724),
    Spot("philly", 39.9526, -75.1652),
    Spot("boston", 42.3601, -71.0589),
    Spot("la", 34.0522, -118.2437),
    Spot("nowhere", None, None),
]


def test_los_angeles_outside_default_radius():
    la = Spot("la", 34.0522, -118.2437)
    assert nearby(*NEW_YORK, [la]) == []
    assert DEFAULT_RADIUS_KM == 50.0


def test_los_angeles_inside_large_radius():
    la = Spot("la", 34.0522, -118.2437)
    [match] = nearby(*NEW_YORK, [la], radius_km=4000)
    assert match.candidate is la
    assert match.distance_km == pytest.approx(3936, abs=1.0)


def test_results_sorted_by_distance():
    matches = nearby(*NEW_YORK, CANDIDATES, radius_km=5000)
    distances = [m.distance_km for m in matches]
    assert distances == sorted(distances)
    assert _ids(matches)[0] == "here"
    assert _ids(matches)[-1] == "la"


def test_candidates_without_location_are_skipped():
    matches = nearby(*NEW_YORK, CANDIDATES, radius_km=20000)
    assert "nowhere" not in _ids(matches)
    assert len(matches) == len(CANDIDATES) - 1


@pytest.mark.parametrize("r1, r2", [(1, 10), (10, 100), (100, 400), (400, 5000), (0, 1)])
def test_smaller_radius_is_subset(r1, r2):
    small = set(_ids(nearby(*NEW_YORK, CANDIDATES, radius_km=r1)))
    large = set(_ids(nearby(*NEW_YORK, CANDIDATES, radius_km=r2)))
    assert small <= large


def test_boundary_is_exclusive():
    target = Spot("newark", 40.7357, -74.1724)
    exact = distance_km(*NEW_YORK, target.lat, target.lng)
    assert nearby(*NEW_YORK, [target], radius_km=exact) == []
    assert _ids(nearby(*NEW_YORK, [target], radius_km=exact + 1e-6)) == ["newark"]


def test_ties_are_broken_by_id():
    same = [Spot("b", *NEW_YORK), Spot("c", *NEW_YORK), Spot("a", *NEW_YORK)]
    matches = nearby(*NEW_YORK, same)
    assert _ids(matches) == ["a", "b", "c"]
    assert all(m.distance_km == 0.0 for m in matches)


def test_zero_radius_returns_nothing():
    assert nearby(*NEW_YORK, CANDIDATES, radius_km=0) == []


def test_empty_candidates():
    assert nearby(*NEW_YORK, []) == []


@pytest.mark.parametrize("radius", [-1, float("nan"), float("inf")])
def test_invalid_radius_rejected(radius):
    with pytest.raises(ValidationError):
        nearby(*NEW_YORK, CANDIDATES, radius_km=radius)


def test_does_not_mutate_input():
    candidates = list(CANDIDATES)
    nearby(*NEW_YORK, candidates, radius_km=5000)
    assert candidates == CANDIDATES
