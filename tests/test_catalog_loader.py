import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from surfmap.catalog.loader import load_listings, parse_listings
from surfmap.catalog.spots import SURF_SPOTS, lookup_spot
from surfmap.config.settings import get_settings


def test_parse_listings_accepts_flat_and_nested_coordinates():
    listings = parse_listings(
        [
            {"id": "flat", "name": "Flat", "lat": 21.3, "lon": -157.8},
            {"id": "nested", "name": "Nested", "location": {"lat": -8.34, "lon": 115.09}},
        ]
    )
    assert listings[0].location.lat == 21.3
    assert listings[1].location.lon == 115.09


def test_parse_listings_places_named_spots():
    listings = parse_listings(
        [
            {"id": "s1", "kind": "session", "name": "Camp", "location_name": "Puerto Escondido"},
            {"id": "b1", "name": "Unknown spot", "location_name": "Atlantis"},
        ]
    )
    assert listings[0].location.lat == SURF_SPOTS["Puerto Escondido"].lat
    assert listings[0].location.lon == SURF_SPOTS["Puerto Escondido"].lon
    assert listings[1].location is None


def test_parse_listings_rejects_out_of_range_coordinates():
    with pytest.raises(PydanticValidationError):
        parse_listings([{"id": "bad", "name": "Bad", "lat": 95, "lon": 0}])


def test_parse_listings_requires_a_list():
    with pytest.raises(ValueError, match="JSON list"):
        parse_listings({"id": "x"})


def test_load_listings_reads_json_file(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps([{"id": " b-1 ", "name": "Board", "location_name": "gold coast"}]), encoding="utf-8")

    listings = load_listings(path)
    assert [x.id for x in listings] == ["b-1"]
    assert listings[0].location.lat == SURF_SPOTS["Gold Coast"].lat


def test_packaged_sample_catalog_loads():
    listings = load_listings(get_settings().catalog.path)
    kinds = {x.kind for x in listings}
    assert kinds == {"board", "session"}
    assert all(x.location is not None for x in listings)


def test_lookup_spot_is_case_and_space_insensitive():
    assert lookup_spot("santa cruz") == SURF_SPOTS["Santa Cruz"]
    assert lookup_spot(" SANTACRUZ ") == SURF_SPOTS["Santa Cruz"]
    assert lookup_spot("") is None
    assert lookup_spot(None) is None
