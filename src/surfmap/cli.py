"""
SurfMap CLI entrypoint.

This CLI is intended for quick local checks of the map engine without the app.
It delegates to `surfmap.layout` and the core geometry helpers.
"""

from __future__ import annotations

import argparse
import json
from datetime import date
from typing import Any

from surfmap.catalog.loader import load_listings
from surfmap.catalog.spots import SURF_SPOTS
from surfmap.config.settings import get_settings
from surfmap.core.geo import distance
from surfmap.core.logging import configure_logging
from surfmap.core.projection import project
from surfmap.domain.models import ListingFilters
from surfmap.layout.filters import filter_listings
from surfmap.layout.markers import layout_markers
from surfmap.layout.nearby import nearby_listings


def _cmd_distance(args: argparse.Namespace) -> int:
    miles = distance(args.lat1, args.lon1, args.lat2, args.lon2)
    if args.json:
        print(json.dumps({"miles": miles}))
    else:
        print(f"{miles:.3f} miles")
    return 0


def _cmd_project(args: argparse.Namespace) -> int:
    settings = get_settings()
    width = args.raster_width or settings.map.raster_width
    height = args.raster_height or settings.map.raster_height
    px = project(args.lon, args.lat, width, height)
    if args.json:
        print(json.dumps({"x": px.x, "y": px.y}))
    else:
        print(f"x={px.x:.2f} y={px.y:.2f} (raster {width}x{height})")
    return 0


def _cmd_markers(args: argparse.Namespace) -> int:
    settings = get_settings()
    filters = ListingFilters(
        location=args.location,
        keyword=args.keyword,
        board_type=args.board_type,
        session_type=args.session_type,
        level=args.level,
        available_from=args.available_from,
        available_to=args.available_to,
    )
    listings = filter_listings(load_listings(args.catalog or settings.catalog.path), filters, kind=args.kind)
    result = layout_markers(
        listings,
        viewport_width=args.viewport_width,
        viewport_height=args.viewport_height,
        settings=settings,
    )

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    for m in result.markers:
        flag = " *" if m.displaced else ""
        print(f"{m.id:<24} x={m.x:8.2f} y={m.y:8.2f}{flag}")
    if result.skipped_ids:
        print(f"skipped: {', '.join(result.skipped_ids)}")
    return 0


def _cmd_nearby(args: argparse.Namespace) -> int:
    settings = get_settings()
    listings = load_listings(args.catalog or settings.catalog.path)
    result = nearby_listings(listings, args.listing_id, radius_miles=args.radius, settings=settings)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    origin = result.origin
    print(f"Within {result.radius_miles:g} miles of {origin.name} ({origin.location_name or origin.id}):")
    for i, item in enumerate(result.results, start=1):
        print(f"{i:>2}. {item.listing.name}  {item.distance_label}")
    return 0


def _cmd_spots(_: argparse.Namespace) -> int:
    for name, point in SURF_SPOTS.items():
        print(f"{name:<18} lat={point.lat:9.4f} lon={point.lon:9.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the SurfMap CLI."""
    parser = argparse.ArgumentParser(prog="surfmap")
    sub = parser.add_subparsers(dest="command", required=True)

    d = sub.add_parser("distance", help="Great-circle distance in miles between two points.")
    d.add_argument("--lat1", required=True, type=float)
    d.add_argument("--lon1", required=True, type=float)
    d.add_argument("--lat2", required=True, type=float)
    d.add_argument("--lon2", required=True, type=float)
    d.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    d.set_defaults(func=_cmd_distance)

    p = sub.add_parser("project", help="Project a lon/lat pair onto the world raster.")
    p.add_argument("--lon", required=True, type=float)
    p.add_argument("--lat", required=True, type=float)
    p.add_argument("--raster-width", type=int, default=None)
    p.add_argument("--raster-height", type=int, default=None)
    p.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    p.set_defaults(func=_cmd_project)

    m = sub.add_parser("markers", help="Lay out catalog markers for a viewport.")
    m.add_argument("--catalog", type=str, default=None, help="Catalog JSON path (defaults to settings)")
    m.add_argument("--kind", choices=["board", "session"], default="board")
    m.add_argument("--viewport-width", required=True, type=float)
    m.add_argument("--viewport-height", type=float, default=None)
    m.add_argument("--location", type=str, default=None, help="Substring of the spot name")
    m.add_argument("--keyword", type=str, default=None, help="Substring of the name or description")
    m.add_argument("--board-type", choices=["soft-top", "shortboard", "fish", "longboard", "sup"], default=None)
    m.add_argument("--session-type", choices=["lesson", "tour", "camp", "session"], default=None)
    m.add_argument("--level", choices=["beginner", "intermediate", "advanced"], default=None)
    m.add_argument("--available-from", type=date.fromisoformat, default=None, help="ISO date (e.g. 2026-07-01)")
    m.add_argument("--available-to", type=date.fromisoformat, default=None, help="ISO date (e.g. 2026-07-14)")
    m.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    m.set_defaults(func=_cmd_markers)

    n = sub.add_parser("nearby", help="List catalog entries near a listing.")
    n.add_argument("listing_id")
    n.add_argument("--catalog", type=str, default=None, help="Catalog JSON path (defaults to settings)")
    n.add_argument("--radius", type=float, default=None, help="Radius in miles (defaults to settings)")
    n.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    n.set_defaults(func=_cmd_nearby)

    s = sub.add_parser("spots", help="Print the known surf spots and their coordinates.")
    s.set_defaults(func=_cmd_spots)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m surfmap.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
