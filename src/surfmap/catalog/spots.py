"""
Named surf spots and their coordinates.

Listings created from the app only carry a location name; the loader places them
at the spot's coordinates.
"""

from __future__ import annotations

from surfmap.core.geo import GeoPoint

SURF_SPOTS: dict[str, GeoPoint] = {
    "Honolulu": GeoPoint(lat=21.3099, lon=-157.8581),
    "Kona": GeoPoint(lat=19.6400, lon=-155.9969),
    "San Diego": GeoPoint(lat=32.7157, lon=-117.1611),
    "Santa Cruz": GeoPoint(lat=36.9741, lon=-122.0308),
    "Bali": GeoPoint(lat=-8.3405, lon=115.0920),
    "Gold Coast": GeoPoint(lat=-28.0167, lon=153.4000),
    "Hossegor": GeoPoint(lat=43.6647, lon=-1.3967),
    "Ericeira": GeoPoint(lat=38.9631, lon=-9.4170),
    "Taghazout": GeoPoint(lat=30.5456, lon=-9.7103),
    "Chiba": GeoPoint(lat=35.6050, lon=140.1233),
    "Lisbon": GeoPoint(lat=38.7223, lon=-9.1393),
    "Puerto Escondido": GeoPoint(lat=15.8720, lon=-97.0767),
}

_BY_KEY = {name.casefold().replace(" ", ""): point for name, point in SURF_SPOTS.items()}


def lookup_spot(name: str | None) -> GeoPoint | None:
    """Coordinates for a spot name (case and spacing insensitive), or None if unknown."""
    if not name:
        return None
    key = str(name).strip().casefold().replace(" ", "").replace("_", "")
    if not key:
        return None
    return _BY_KEY.get(key)
