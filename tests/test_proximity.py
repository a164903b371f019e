import math
from dataclasses import dataclass

import pytest

from surfmap.core.errors import ValidationError
from surfmap.core.geo import GeoPoint, destination_point, haversine_miles
from surfmap.core.proximity import ProximityResult, nearby

ORIGIN = GeoPoint(lat=0.0, lon=0.0)
SAN_DIEGO = GeoPoint(lat=32.7157, lon=-117.1611)
SANTA_CRUZ = GeoPoint(lat=36.9741, lon=-122.0308)


@dataclass
class Spot:
    id: str
    location: GeoPoint


def test_nearby_orders_by_distance():
    candidates = [
        Spot("one", destination_point(ORIGIN, 10, 1)),
        Spot("five", destination_point(ORIGIN, 200, 5)),
        Spot("three", destination_point(ORIGIN, 300, 3)),
    ]
    out = nearby(ORIGIN, candidates, 50)
    assert [r.entity.id for r in out] == ["one", "three", "five"]
    assert [round(r.distance_miles, 6) for r in out] == [1.0, 3.0, 5.0]


def test_nearby_radius_boundary_is_inclusive():
    at_edge = Spot("edge", destination_point(ORIGIN, 90, 50))
    radius = haversine_miles(ORIGIN, at_edge.location)
    assert radius == pytest.approx(50, abs=1e-9)

    out = nearby(ORIGIN, [at_edge, Spot("outside", destination_point(ORIGIN, 90, 50.01))], radius)
    assert [r.entity.id for r in out] == ["edge"]
    assert out[0].distance_miles == radius


def test_nearby_breaks_distance_ties_by_id():
    p = destination_point(ORIGIN, 45, 2)
    out = nearby(ORIGIN, [Spot("b", p), Spot("c", p), Spot("a", p)], 10)
    assert [r.entity.id for r in out] == ["a", "b", "c"]


def test_nearby_empty_candidates_returns_empty_list():
    assert nearby(ORIGIN, [], 50) == []


def test_nearby_does_not_mutate_candidates():
    candidates = [Spot("x", destination_point(ORIGIN, 0, 4)), Spot("y", destination_point(ORIGIN, 0, 2))]
    snapshot = list(candidates)
    out = nearby(ORIGIN, candidates, 50)
    assert candidates == snapshot
    assert out[0].entity is candidates[1]
    assert all(isinstance(r, ProximityResult) for r in out)


def test_nearby_san_diego_scenario():
    two_miles_out = Spot("close", destination_point(SAN_DIEGO, 120, 2))
    santa_cruz = Spot("santa-cruz", SANTA_CRUZ)
    out = nearby(SAN_DIEGO, [santa_cruz, two_miles_out], 50)
    assert [r.entity.id for r in out] == ["close"]
    assert out[0].distance_miles == pytest.approx(2, rel=1e-9)


def test_nearby_zero_radius_keeps_only_coincident_points():
    out = nearby(ORIGIN, [Spot("here", ORIGIN), Spot("there", destination_point(ORIGIN, 0, 0.1))], 0)
    assert [r.entity.id for r in out] == ["here"]


def test_nearby_exclude_id_drops_the_origin_entity():
    candidates = [Spot("me", ORIGIN), Spot("friend", destination_point(ORIGIN, 0, 1))]
    out = nearby(ORIGIN, candidates, 5, exclude_id="me")
    assert [r.entity.id for r in out] == ["friend"]


def test_nearby_accepts_custom_accessors():
    rows = [
        {"key": "r2", "lat": 0.0, "lon": 0.03},
        {"key": "r1", "lat": 0.01, "lon": 0.0},
    ]
    out = nearby(
        ORIGIN,
        rows,
        10,
        get_location=lambda r: GeoPoint(lat=r["lat"], lon=r["lon"]),
        get_id=lambda r: r["key"],
    )
    assert [r.entity["key"] for r in out] == ["r1", "r2"]


@pytest.mark.parametrize("radius", [-1, math.nan])
def test_nearby_rejects_bad_radius(radius):
    with pytest.raises(ValidationError, match="radius_miles"):
        nearby(ORIGIN, [], radius)


def test_nearby_rejects_invalid_origin():
    with pytest.raises(ValidationError, match="latitude"):
        nearby(GeoPoint(lat=91, lon=0), [], 10)


@pytest.mark.parametrize(
    "bad_point",
    [GeoPoint(lat=math.nan, lon=math.nan), GeoPoint(lat=95.0, lon=0.0), GeoPoint(lat=0.0, lon=-181.0)],
)
def test_nearby_rejects_candidates_with_invalid_coordinates(bad_point):
    candidates = [Spot("bad", bad_point), Spot("ok", GeoPoint(lat=0.0, lon=0.01))]
    with pytest.raises(ValidationError, match="candidate 'bad'"):
        nearby(ORIGIN, candidates, 50)
