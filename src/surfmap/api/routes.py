"""
API routes.

Endpoints:
- GET  `/api/health`: liveness probe.
- GET  `/api/settings`: public map settings for the frontend.
- GET  `/api/distance`: great-circle distance in miles between two points.
- POST `/api/project`: project a point onto the configured world raster.
- POST `/api/markers`: lay out catalog markers for a viewport.
- POST `/api/nearby`: ranked listings near a tapped listing.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

from fastapi import APIRouter, HTTPException, Query

from surfmap.catalog.loader import load_listings
from surfmap.config.overrides import apply_settings_overrides
from surfmap.config.settings import Settings, get_settings
from surfmap.core.errors import NotFoundError, ValidationError
from surfmap.core.geo import distance
from surfmap.core.projection import project
from surfmap.domain.models import (
    GeoPoint,
    Listing,
    MarkerLayoutRequest,
    MarkerLayoutResult,
    NearbyRequest,
    NearbyResult,
)
from surfmap.layout.filters import filter_listings
from surfmap.layout.markers import layout_markers
from surfmap.layout.nearby import nearby_listings

router = APIRouter()


@lru_cache
def _catalog() -> tuple[Listing, ...]:
    settings = get_settings()
    return tuple(load_listings(settings.catalog.path))


def _request_settings(overrides: Mapping[str, Any] | None) -> Settings:
    try:
        return apply_settings_overrides(get_settings(), overrides)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return the map knobs the frontend needs (no file paths)."""
    settings = get_settings()
    return {
        "map": settings.map.model_dump(mode="json"),
        "nearby": settings.nearby.model_dump(mode="json"),
    }


@router.get("/api/distance")
def get_distance(
    lat1: float = Query(..., ge=-90, le=90),
    lon1: float = Query(..., ge=-180, le=180),
    lat2: float = Query(..., ge=-90, le=90),
    lon2: float = Query(..., ge=-180, le=180),
) -> dict:
    try:
        return {"miles": distance(lat1, lon1, lat2, lon2)}
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/api/project")
def post_project(point: GeoPoint) -> dict:
    """Project a lon/lat pair onto the configured raster (pixel space)."""
    settings = get_settings()
    try:
        px = project(point.lon, point.lat, settings.map.raster_width, settings.map.raster_height)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"x": px.x, "y": px.y, "raster": {"width": settings.map.raster_width, "height": settings.map.raster_height}}


@router.post("/api/markers", response_model=MarkerLayoutResult)
def post_markers(req: MarkerLayoutRequest) -> MarkerLayoutResult:
    """Lay out markers for catalog listings of the requested kind that match the filters."""
    settings = _request_settings(req.settings_overrides)
    listings = filter_listings(_catalog(), req, kind=req.kind)
    try:
        return layout_markers(
            listings,
            viewport_width=req.viewport_width,
            viewport_height=req.viewport_height,
            settings=settings,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/api/nearby", response_model=NearbyResult)
def post_nearby(req: NearbyRequest) -> NearbyResult:
    """Return listings of the same kind within the radius of `listing_id`, nearest first."""
    settings = _request_settings(req.settings_overrides)
    try:
        return nearby_listings(
            list(_catalog()),
            req.listing_id,
            radius_miles=req.radius_miles,
            include_origin=req.include_origin,
            settings=settings,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
