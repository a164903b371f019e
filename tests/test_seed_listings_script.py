import importlib.util
import json
from pathlib import Path

import pytest

from surfmap.catalog.loader import load_listings
from surfmap.catalog.spots import SURF_SPOTS
from surfmap.core.geo import GeoPoint, haversine_miles

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "seed_listings.py"


@pytest.fixture(scope="module")
def seed_script():
    spec = importlib.util.spec_from_file_location("seed_listings", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_seed_rows_stay_within_radius_of_spot(seed_script):
    center = SURF_SPOTS["Ericeira"]
    rows = seed_script.seed_rows("Ericeira", center, count=6, max_radius_miles=5.0)
    assert [r["id"] for r in rows][:2] == ["board-ericeira-seed-1", "board-ericeira-seed-2"]
    for r in rows:
        loc = r["location"]
        d = haversine_miles(center, GeoPoint(lat=loc["lat"], lon=loc["lon"]))
        assert d <= 5.0 + 1e-3
    assert rows == seed_script.seed_rows("Ericeira", center, count=6, max_radius_miles=5.0)


def test_seed_script_appends_to_catalog(seed_script, tmp_path, capsys):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps([{"id": "keep", "name": "Keep", "location_name": "Bali"}]), encoding="utf-8")

    argv = ["--catalog", str(path), "--spot", "gold coast", "--count", "3", "--kind", "session"]
    assert seed_script.main(argv) == 0
    assert seed_script.main(argv) == 0
    assert "Added: 0 Replaced: 3" in capsys.readouterr().out

    listings = load_listings(path)
    assert [x.id for x in listings] == ["keep"] + [f"session-gold-coast-seed-{i}" for i in (1, 2, 3)]
    assert all(x.location_name == "gold coast" for x in listings[1:])


def test_seed_script_rejects_unknown_spot(seed_script, tmp_path):
    with pytest.raises(SystemExit, match="Unknown surf spot"):
        seed_script.main(["--catalog", str(tmp_path / "x.json"), "--spot", "Atlantis"])
