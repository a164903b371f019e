"""
Listing catalog loader.

The catalog is a local JSON file (default: `data/catalogs/listings.json`) holding
boards and sessions. Entries may carry coordinates either as a nested
`location: {lat, lon}` object or as flat `lat`/`lon` keys; entries with neither
are placed at their named surf spot when it is known.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from surfmap.catalog.spots import lookup_spot
from surfmap.core.env import resolve_project_path
from surfmap.domain.models import Listing

logger = logging.getLogger(__name__)

_LISTINGS_ADAPTER = TypeAdapter(list[Listing])


def _normalize_entry(entry: Any) -> Any:
    if not isinstance(entry, dict):
        return entry
    out = dict(entry)
    lat = out.pop("lat", None)
    lon = out.pop("lon", None)
    if out.get("location") is None and lat is not None and lon is not None:
        out["location"] = {"lat": lat, "lon": lon}
    if out.get("location") is None:
        spot = lookup_spot(out.get("location_name"))
        if spot is not None:
            out["location"] = {"lat": spot.lat, "lon": spot.lon}
    return out


def parse_listings(payload: Any) -> list[Listing]:
    """Validate a decoded catalog payload (a JSON list) into listings."""
    if not isinstance(payload, list):
        raise ValueError("listing catalog must be a JSON list")
    listings = _LISTINGS_ADAPTER.validate_python([_normalize_entry(e) for e in payload])
    missing = [x.id for x in listings if x.location is None]
    if missing:
        logger.warning("%d listings have no coordinates and will not be mapped: %s", len(missing), missing[:10])
    return listings


def load_listings(path: str | Path) -> list[Listing]:
    """Load and validate a listing catalog JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    return parse_listings(payload)
