"""
Proximity queries ("what is near this point").

Candidates are generic: callers pass accessors for the location and the id, the
same way `SpatialGridIndex`-style helpers take a `get_latlon` callable. Results
are new wrapper records; candidates are never mutated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

from surfmap.core.errors import ValidationError
from surfmap.core.geo import GeoPoint, check_lat_lon, distance

T = TypeVar("T")


@dataclass(frozen=True)
class ProximityResult(Generic[T]):
    entity: T
    distance_miles: float


def _default_location(item: Any) -> GeoPoint:
    return item.location


def _default_id(item: Any) -> str:
    return str(item.id)


def nearby(
    origin: GeoPoint,
    candidates: Iterable[T],
    radius_miles: float,
    *,
    get_location: Callable[[T], GeoPoint] = _default_location,
    get_id: Callable[[T], str] = _default_id,
    exclude_id: str | None = None,
) -> list[ProximityResult[T]]:
    """Return candidates within `radius_miles` of `origin`, nearest first.

    The radius is inclusive. Exact distance ties are ordered by candidate id.
    `exclude_id` drops one candidate (typically the one the user tapped).
    A candidate with NaN or out-of-range coordinates raises `ValidationError`;
    callers filter such rows out before querying.
    """
    r = float(radius_miles)
    if math.isnan(r) or r < 0:
        raise ValidationError(f"radius_miles must be >= 0, got {radius_miles!r}")
    lat0, lon0 = check_lat_lon(origin.lat, origin.lon)

    hits: list[tuple[float, str, T]] = []
    for item in candidates:
        item_id = get_id(item)
        if exclude_id is not None and item_id == exclude_id:
            continue
        loc = get_location(item)
        try:
            lat, lon = check_lat_lon(loc.lat, loc.lon)
        except ValidationError as exc:
            raise ValidationError(f"candidate {item_id!r}: {exc}") from exc
        d = distance(lat0, lon0, lat, lon)
        if d <= r:
            hits.append((d, item_id, item))

    hits.sort(key=lambda h: (h[0], h[1]))
    return [ProximityResult(entity=item, distance_miles=d) for d, _, item in hits]
