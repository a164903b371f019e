"""
Equirectangular projection onto the fixed world raster.

The map screen draws a single world image (2000x1000 by default). Longitude maps
linearly to x and latitude linearly to y, with north at the top. Rescaling from
raster pixels to the live viewport is a separate step (`to_viewport`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from surfmap.core.errors import ValidationError
from surfmap.core.geo import check_lat_lon


@dataclass(frozen=True)
class PixelPoint:
    """A position in raster (or viewport) pixel space."""

    x: float
    y: float


def _check_size(width: float, height: float, *, what: str) -> tuple[float, float]:
    w = float(width)
    h = float(height)
    if not (math.isfinite(w) and math.isfinite(h)) or w <= 0 or h <= 0:
        raise ValidationError(f"{what} size must be positive and finite, got {width!r}x{height!r}")
    return w, h


def project(lon: float, lat: float, raster_width: float, raster_height: float) -> PixelPoint:
    """Project a lon/lat pair onto raster pixels.

    Raises `ValidationError` for NaN or out-of-range coordinates rather than
    returning a position that could pass for a real one.
    """
    lat_f, lon_f = check_lat_lon(lat, lon)
    w, h = _check_size(raster_width, raster_height, what="raster")

    lat_f = max(-90.0, min(90.0, lat_f))
    # +180 and -180 are the same meridian; both land on x == 0.
    x = ((lon_f + 180.0) % 360.0) / 360.0 * w
    y = (90.0 - lat_f) / 180.0 * h
    return PixelPoint(x=x, y=y)


def to_viewport(
    pixel: PixelPoint,
    *,
    raster_width: float,
    raster_height: float,
    viewport_width: float,
    viewport_height: float,
) -> PixelPoint:
    """Linearly rescale a raster pixel into viewport pixels."""
    rw, rh = _check_size(raster_width, raster_height, what="raster")
    vw, vh = _check_size(viewport_width, viewport_height, what="viewport")
    return PixelPoint(x=pixel.x / rw * vw, y=pixel.y / rh * vh)
