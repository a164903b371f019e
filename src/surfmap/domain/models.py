"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- catalog entities (`Listing`: a rentable board or a bookable surf session)
- map layout input/output (`MarkerLayoutRequest`, `MarkerLayoutResult`)
- nearby query input/output (`NearbyRequest`, `NearbyResult`)

The core geometry code works on plain dataclasses; these models are what the
API, CLI and catalog loader exchange.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

ListingKind = Literal["board", "session"]
BoardType = Literal["soft-top", "shortboard", "fish", "longboard", "sup"]
SessionType = Literal["lesson", "tour", "camp", "session"]
SessionLevel = Literal["beginner", "intermediate", "advanced"]


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Listing(BaseModel):
    """A board or session shown on the map.

    `location` may be missing in raw catalog data; the loader fills it from the
    named surf spot when it can. Listings still without a location never reach
    the map.
    """

    id: str
    kind: ListingKind = "board"
    name: str
    location_name: str | None = None
    location: GeoPoint | None = None

    board_type: BoardType | None = None
    session_type: SessionType | None = None
    level: SessionLevel | None = None
    price_per_day: float | None = Field(default=None, ge=0)
    delivery_available: bool = False
    description: str | None = None
    available_start: date | None = None
    available_end: date | None = None

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("listing id must not be empty")
        return value


class Marker(BaseModel):
    """One laid-out map marker in viewport pixels."""

    id: str
    point: GeoPoint
    x: float
    y: float
    displaced: bool = False


class ListingFilters(BaseModel):
    """Search-bar filters of the map screen. Unset fields do not filter.

    `location` and `keyword` are case-insensitive substring matches; the date
    bounds keep listings whose availability window overlaps them.
    """

    location: str | None = None
    keyword: str | None = None
    board_type: BoardType | None = None
    session_type: SessionType | None = None
    level: SessionLevel | None = None
    available_from: date | None = None
    available_to: date | None = None
    listing_ids: list[str] | None = None

    @model_validator(mode="after")
    def _validate_dates(self) -> "ListingFilters":
        if self.available_from and self.available_to and self.available_to < self.available_from:
            raise ValueError("available_to must not be before available_from")
        return self


class MarkerLayoutRequest(ListingFilters):
    """Request payload for laying out catalog markers on the map."""

    kind: ListingKind = "board"
    viewport_width: float = Field(..., gt=0)
    viewport_height: float | None = Field(default=None, gt=0)
    settings_overrides: dict[str, Any] | None = None


class MarkerLayoutResult(BaseModel):
    markers: list[Marker]
    skipped_ids: list[str] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)


class NearbyRequest(BaseModel):
    """Request payload for the "nearby" list shown after a marker tap."""

    listing_id: str
    radius_miles: float | None = Field(default=None, ge=0)
    include_origin: bool | None = None
    settings_overrides: dict[str, Any] | None = None


class NearbyItem(BaseModel):
    listing: Listing
    distance_miles: float = Field(..., ge=0)
    distance_label: str


class NearbyResult(BaseModel):
    origin: Listing
    radius_miles: float
    results: list[NearbyItem]
