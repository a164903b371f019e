import pytest

from surfmap.config.settings import MapSettings, Settings
from surfmap.domain.models import GeoPoint, Listing
from surfmap.layout.markers import layout_markers


def _listing(id_: str, lat: float, lon: float, kind: str = "board") -> Listing:
    return Listing(id=id_, kind=kind, name=id_, location=GeoPoint(lat=lat, lon=lon))


def test_layout_markers_rescales_to_viewport():
    result = layout_markers([_listing("null-island", 0, 0)], viewport_width=1000, settings=Settings())
    assert len(result.markers) == 1
    m = result.markers[0]
    assert (m.x, m.y) == (500.0, 250.0)
    assert m.displaced is False
    assert result.meta["viewport"] == {"width": 1000.0, "height": 500.0}


def test_layout_markers_uses_explicit_viewport_height():
    result = layout_markers([_listing("a", 0, 0)], viewport_width=1000, viewport_height=800, settings=Settings())
    assert result.markers[0].y == pytest.approx(400.0)


def test_layout_markers_spreads_listings_at_the_same_spot():
    listings = [
        _listing("board-2", 32.7157, -117.1611),
        _listing("board-1", 32.7160, -117.1615),
        _listing("bali", -8.3405, 115.0920),
    ]
    result = layout_markers(listings, viewport_width=800, settings=Settings())

    by_id = {m.id: m for m in result.markers}
    assert [m.id for m in result.markers] == ["board-2", "board-1", "bali"]
    assert by_id["board-1"].displaced and by_id["board-2"].displaced
    assert not by_id["bali"].displaced
    dx = by_id["board-1"].x - by_id["board-2"].x
    dy = by_id["board-1"].y - by_id["board-2"].y
    assert (dx * dx + dy * dy) ** 0.5 >= 24 - 1e-9
    assert result.meta["displaced_count"] == 2
    # The marker keeps pointing at the real coordinate.
    assert by_id["board-1"].point == GeoPoint(lat=32.7160, lon=-117.1615)


def test_layout_markers_respects_configured_separation():
    settings = Settings(map=MapSettings(min_separation_px=4))
    listings = [_listing("a", 10, 10), _listing("b", 10.2, 10.2)]
    # 0.2 degrees is ~0.44px on an 800px-wide viewport, under the 4px threshold.
    result = layout_markers(listings, viewport_width=800, settings=settings)
    a, b = result.markers
    assert ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5 == pytest.approx(8.0)


def test_layout_markers_skips_listings_without_usable_coordinates():
    no_location = Listing(id="unplaced", name="Unplaced", location_name="Atlantis")
    # Bypass validation to simulate a bad row coming from an external store.
    broken = Listing.model_construct(id="broken", kind="board", name="Broken", location=GeoPoint.model_construct(lat=95.0, lon=0.0))
    good = _listing("good", 21.3099, -157.8581)

    result = layout_markers([no_location, broken, good], viewport_width=400, settings=Settings())
    assert [m.id for m in result.markers] == ["good"]
    assert result.skipped_ids == ["unplaced", "broken"]


def test_layout_markers_is_stable_across_calls():
    listings = [_listing(f"b{i}", 36.97 + i * 0.001, -122.03) for i in range(8)]
    first = layout_markers(listings, viewport_width=1200, settings=Settings())
    second = layout_markers(listings, viewport_width=1200, settings=Settings())
    assert first.model_dump() == second.model_dump()
