"""
"Nearby" list for a tapped marker.

Tapping a board (or session) on the map lists every listing of the same kind
within the configured radius of it, nearest first.
"""

from __future__ import annotations

import logging
from typing import Sequence

from surfmap.config.settings import Settings, get_settings
from surfmap.core.errors import NotFoundError, ValidationError
from surfmap.core.geo import format_distance
from surfmap.core.proximity import nearby
from surfmap.domain.models import Listing, NearbyItem, NearbyResult

logger = logging.getLogger(__name__)


def find_listing(listings: Sequence[Listing], listing_id: str) -> Listing:
    for listing in listings:
        if listing.id == listing_id:
            return listing
    raise NotFoundError(f"unknown listing id: {listing_id!r}")


def nearby_listings(
    listings: Sequence[Listing],
    listing_id: str,
    *,
    radius_miles: float | None = None,
    include_origin: bool | None = None,
    settings: Settings | None = None,
) -> NearbyResult:
    """Rank listings of the same kind around `listing_id` within the radius."""
    settings = settings or get_settings()
    radius = settings.nearby.radius_miles if radius_miles is None else float(radius_miles)
    keep_origin = settings.nearby.include_origin if include_origin is None else bool(include_origin)

    origin = find_listing(listings, listing_id)
    if origin.location is None:
        raise ValidationError(f"listing {origin.id!r} has no coordinates")

    candidates = [x for x in listings if x.kind == origin.kind and x.location is not None]
    hits = nearby(
        origin.location,
        candidates,
        radius,
        exclude_id=None if keep_origin else origin.id,
    )
    logger.debug("Nearby %s: %d of %d candidates within %.1f mi", origin.id, len(hits), len(candidates), radius)

    return NearbyResult(
        origin=origin,
        radius_miles=radius,
        results=[
            NearbyItem(listing=h.entity, distance_miles=h.distance_miles, distance_label=format_distance(h.distance_miles))
            for h in hits
        ],
    )
