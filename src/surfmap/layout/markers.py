"""
Map marker layout.

Render path for the map screen:
listings -> equirectangular raster pixels -> viewport pixels -> decluttered markers.

Listings with missing or invalid coordinates are dropped here (and reported in
`skipped_ids`) so the projector never sees them and no marker is drawn at a
misleading position.
"""

from __future__ import annotations

import logging
from typing import Iterable

from surfmap.config.settings import Settings, get_settings
from surfmap.core.declutter import MarkerPosition, declutter
from surfmap.core.errors import ValidationError
from surfmap.core.projection import project, to_viewport
from surfmap.domain.models import GeoPoint, Listing, Marker, MarkerLayoutResult

logger = logging.getLogger(__name__)


def layout_markers(
    listings: Iterable[Listing],
    *,
    viewport_width: float,
    viewport_height: float | None = None,
    settings: Settings | None = None,
) -> MarkerLayoutResult:
    """Place one marker per mappable listing in viewport pixel space.

    `viewport_height` defaults to the raster's aspect ratio applied to `viewport_width`.
    The overlap threshold is applied in viewport pixels, where taps happen.
    """
    settings = settings or get_settings()
    raster_w = settings.map.raster_width
    raster_h = settings.map.raster_height
    if viewport_height is None:
        viewport_height = float(viewport_width) * raster_h / raster_w

    points: dict[str, GeoPoint] = {}
    positions: list[MarkerPosition] = []
    skipped: list[str] = []
    for listing in listings:
        if listing.location is None:
            skipped.append(listing.id)
            continue
        loc = listing.location
        try:
            raster_px = project(loc.lon, loc.lat, raster_w, raster_h)
        except ValidationError as exc:
            logger.warning("Skipping listing %s: %s", listing.id, exc)
            skipped.append(listing.id)
            continue
        px = to_viewport(
            raster_px,
            raster_width=raster_w,
            raster_height=raster_h,
            viewport_width=viewport_width,
            viewport_height=viewport_height,
        )
        points[listing.id] = loc
        positions.append(MarkerPosition(id=listing.id, x=px.x, y=px.y))

    placed = declutter(positions, settings.map.min_separation_px)

    markers = [
        Marker(
            id=after.id,
            point=points[after.id],
            x=after.x,
            y=after.y,
            displaced=(after.x, after.y) != (before.x, before.y),
        )
        for before, after in zip(positions, placed)
    ]
    if skipped:
        logger.info("Marker layout skipped %d listings without usable coordinates", len(skipped))

    return MarkerLayoutResult(
        markers=markers,
        skipped_ids=skipped,
        meta={
            "raster": {"width": raster_w, "height": raster_h},
            "viewport": {"width": float(viewport_width), "height": float(viewport_height)},
            "min_separation_px": settings.map.min_separation_px,
            "displaced_count": sum(1 for m in markers if m.displaced),
        },
    )
