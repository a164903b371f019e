"""
Geospatial helpers.

We keep a tiny geometry layer here so the map and "nearby" code can do distance
calculations without pulling in heavier GIS dependencies. Distances are in
statute miles because the marketplace quotes delivery and search radii in miles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from math import asin, atan2, cos, degrees, radians, sin, sqrt

from surfmap.core.errors import ValidationError

EARTH_RADIUS_MILES = 3959.0
FEET_PER_MILE = 5280


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def check_lat_lon(lat: float, lon: float) -> tuple[float, float]:
    """Return `(lat, lon)` as floats, or raise `ValidationError` if either is unusable."""
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"coordinates must be numeric, got lat={lat!r} lon={lon!r}") from exc
    if math.isnan(lat_f) or not -90.0 <= lat_f <= 90.0:
        raise ValidationError(f"latitude out of range [-90, 90]: {lat!r}")
    if math.isnan(lon_f) or not -180.0 <= lon_f <= 180.0:
        raise ValidationError(f"longitude out of range [-180, 180]: {lon!r}")
    return lat_f, lon_f


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in miles between two lat/lon pairs (haversine).

    Raises `ValidationError` for NaN or infinite inputs.
    """
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        raise ValidationError(f"coordinates must be finite, got ({lat1!r}, {lon1!r}) and ({lat2!r}, {lon2!r})")
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dphi = radians(lat2 - lat1)
    dlam = radians(lon2 - lon1)

    cos_product = cos(phi1) * cos(phi2)
    a = sin(dphi / 2) ** 2 + cos_product * sin(dlam / 2) ** 2
    # 1 - a computed directly; subtracting from 1 loses precision near antipodes.
    b = cos(dphi / 2) ** 2 - cos_product * sin(dlam / 2) ** 2
    a = min(1.0, max(0.0, a))
    b = min(1.0, max(0.0, b))
    c = 2 * atan2(sqrt(a), sqrt(b))
    return EARTH_RADIUS_MILES * c


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in miles between two points."""
    return distance(a.lat, a.lon, b.lat, b.lon)


def destination_point(origin: GeoPoint, bearing_deg: float, distance_miles: float) -> GeoPoint:
    """Point reached by travelling `distance_miles` from `origin` on an initial bearing.

    Spherical forward solution with the same Earth radius as `distance`, so
    `haversine_miles(origin, destination_point(origin, b, d))` is `d` up to rounding.
    """
    delta = float(distance_miles) / EARTH_RADIUS_MILES
    theta = radians(bearing_deg)
    phi1 = radians(origin.lat)
    lam1 = radians(origin.lon)

    sin_phi2 = sin(phi1) * cos(delta) + cos(phi1) * sin(delta) * cos(theta)
    phi2 = asin(min(1.0, max(-1.0, sin_phi2)))
    lam2 = lam1 + atan2(sin(theta) * sin(delta) * cos(phi1), cos(delta) - sin(phi1) * sin(phi2))

    lon = (degrees(lam2) + 540.0) % 360.0 - 180.0
    return GeoPoint(lat=degrees(phi2), lon=lon)


def format_distance(miles: float) -> str:
    """Human label used by the nearby list: feet under a mile, otherwise miles."""
    if miles < 1:
        return f"{miles * FEET_PER_MILE:.0f} ft away"
    return f"{miles:.1f} miles away"
