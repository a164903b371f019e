from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from surfmap.catalog.loader import load_listings
from surfmap.catalog.spots import lookup_spot
from surfmap.core.env import resolve_project_path
from surfmap.core.geo import GeoPoint, destination_point

BOARD_TYPES = ["soft-top", "shortboard", "fish", "longboard", "sup"]


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _slug(name: str) -> str:
    return "-".join(name.strip().lower().split())


def seed_rows(
    spot_name: str,
    center: GeoPoint,
    *,
    count: int,
    max_radius_miles: float,
    kind: str = "board",
) -> list[dict[str, Any]]:
    """Place `count` demo listings around `center` on an outward spiral.

    Bearings step by the golden angle and distances grow linearly up to
    `max_radius_miles`, so reruns produce the same rows.
    """
    rows = []
    for i in range(count):
        bearing = (i * 137.508) % 360.0
        miles = max_radius_miles * (i + 1) / count
        p = destination_point(center, bearing, miles)
        row: dict[str, Any] = {
            "id": f"{kind}-{_slug(spot_name)}-seed-{i + 1}",
            "kind": kind,
            "name": f"{spot_name} demo {kind} {i + 1}",
            "location_name": spot_name,
            "location": {"lat": round(p.lat, 6), "lon": round(p.lon, 6)},
        }
        if kind == "board":
            row["board_type"] = BOARD_TYPES[i % len(BOARD_TYPES)]
            row["price_per_day"] = 20 + 5 * (i % 5)
        else:
            row["session_type"] = "lesson"
            row["level"] = "beginner"
            row["price_per_day"] = 60 + 10 * (i % 3)
        rows.append(row)
    return rows


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Append demo listings around a named surf spot to a catalog (offline).")
    p.add_argument("--catalog", type=str, default="data/catalogs/listings.json")
    p.add_argument("--spot", type=str, required=True, help="Known surf spot name (see `surfmap spots`)")
    p.add_argument("--count", type=int, default=8)
    p.add_argument("--max-radius-miles", type=float, default=10.0)
    p.add_argument("--kind", choices=["board", "session"], default="board")
    args = p.parse_args(argv)

    center = lookup_spot(args.spot)
    if center is None:
        raise SystemExit(f"Unknown surf spot: {args.spot!r}")
    if args.count <= 0 or args.max_radius_miles <= 0:
        raise SystemExit("--count and --max-radius-miles must be positive.")

    catalog_path = resolve_project_path(args.catalog)
    existing = load_listings(catalog_path) if catalog_path.exists() else []
    by_id = {x.id: x.model_dump(mode="json", exclude_none=True) for x in existing}

    rows = seed_rows(args.spot, center, count=args.count, max_radius_miles=args.max_radius_miles, kind=args.kind)
    added = 0
    for row in rows:
        if row["id"] not in by_id:
            added += 1
        by_id[row["id"]] = row

    _write_json(catalog_path, list(by_id.values()))
    print("Wrote catalog:", catalog_path)
    print("Seeded:", len(rows), "Added:", added, "Replaced:", len(rows) - added)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
