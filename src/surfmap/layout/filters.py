"""
Listing filters for the map screen.

The marker set is built from the filtered listings: location and keyword search,
board type, session type, level, and an availability window. Results are ordered
by daily price (cheapest first, unpriced last), the order the list view shows.
"""

from __future__ import annotations

from typing import Iterable

from surfmap.domain.models import Listing, ListingFilters, ListingKind


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _available_in(listing: Listing, filters: ListingFilters) -> bool:
    if filters.available_from is None and filters.available_to is None:
        return True
    # Listings without an availability window never match a date search.
    if listing.available_start is None or listing.available_end is None:
        return False
    if filters.available_to is not None and listing.available_start > filters.available_to:
        return False
    if filters.available_from is not None and listing.available_end < filters.available_from:
        return False
    return True


def filter_listings(
    listings: Iterable[Listing],
    filters: ListingFilters | None = None,
    *,
    kind: ListingKind | None = None,
) -> list[Listing]:
    """Return listings matching `kind` and `filters`, sorted by `price_per_day`."""
    filters = filters or ListingFilters()
    location = (filters.location or "").strip().lower()
    keyword = (filters.keyword or "").strip().lower()
    wanted_ids = set(filters.listing_ids) if filters.listing_ids is not None else None

    out: list[Listing] = []
    for x in listings:
        if kind is not None and x.kind != kind:
            continue
        if wanted_ids is not None and x.id not in wanted_ids:
            continue
        if location and not _contains(x.location_name, location):
            continue
        if keyword and not (_contains(x.name, keyword) or _contains(x.description, keyword)):
            continue
        if filters.board_type is not None and x.board_type != filters.board_type:
            continue
        if filters.session_type is not None and x.session_type != filters.session_type:
            continue
        if filters.level is not None and x.level != filters.level:
            continue
        if not _available_in(x, filters):
            continue
        out.append(x)

    # Stable sort: equal prices keep catalog order.
    out.sort(key=lambda x: (x.price_per_day is None, x.price_per_day or 0.0))
    return out
