"""
Marker decluttering (deterministic fan-out of overlapping markers).

Markers closer than `min_separation_px` are grouped into overlap clusters with
union-find. Candidate pairs come from a grid bucket with cell size equal to the
threshold, so only the 3x3 cell neighbourhood of each marker is compared.

Each cluster is spread on a ring around its centroid. Members are ordered by id,
so re-running the layout on the same input never moves a marker.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from surfmap.core.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MIN_SEPARATION_PX = 24.0
RING_CAPACITY = 6


@dataclass(frozen=True)
class MarkerPosition:
    """A marker id and its pixel position."""

    id: str
    x: float
    y: float


class _DisjointSet:
    def __init__(self, n: int):
        self._parent = list(range(n))

    def find(self, i: int) -> int:
        parent = self._parent
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        # Lower index wins so the root of a cluster does not depend on union order.
        if rb < ra:
            ra, rb = rb, ra
        self._parent[rb] = ra


def _check_threshold(min_separation_px: float) -> float:
    s = float(min_separation_px)
    if not math.isfinite(s) or s <= 0:
        raise ValidationError(f"min_separation_px must be positive and finite, got {min_separation_px!r}")
    return s


def _cell_key(x: float, y: float, cell: float) -> tuple[int, int]:
    return (int(math.floor(x / cell)), int(math.floor(y / cell)))


def overlap_clusters(markers: list[MarkerPosition], min_separation_px: float = DEFAULT_MIN_SEPARATION_PX) -> list[list[int]]:
    """Return clusters (as input indices, ascending) of markers that overlap.

    Two markers overlap when their pixel distance is below `min_separation_px`;
    clusters are the connected components of that relation. Singletons are omitted.
    """
    s = _check_threshold(min_separation_px)
    for m in markers:
        if not (math.isfinite(m.x) and math.isfinite(m.y)):
            raise ValidationError(f"marker {m.id!r} has a non-finite position ({m.x!r}, {m.y!r})")

    ds = _DisjointSet(len(markers))
    cells: dict[tuple[int, int], list[int]] = {}
    for i, m in enumerate(markers):
        cx, cy = _cell_key(m.x, m.y, s)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for j in cells.get((cx + dx, cy + dy), ()):
                    other = markers[j]
                    if math.hypot(m.x - other.x, m.y - other.y) < s:
                        ds.union(i, j)
        cells.setdefault((cx, cy), []).append(i)

    groups: dict[int, list[int]] = {}
    for i in range(len(markers)):
        groups.setdefault(ds.find(i), []).append(i)
    return [members for _, members in sorted(groups.items()) if len(members) >= 2]


def ring_radius(cluster_size: int, min_separation_px: float) -> float:
    """Ring radius for a cluster: one threshold per started group of six markers."""
    return float(min_separation_px) * math.ceil(cluster_size / RING_CAPACITY)


def declutter(
    markers: list[MarkerPosition],
    min_separation_px: float = DEFAULT_MIN_SEPARATION_PX,
) -> list[MarkerPosition]:
    """Spread overlapping markers apart; returns new positions in input order.

    The i-th member of a cluster of size k (members sorted by id) sits at angle
    2*pi*i/k on a ring of `ring_radius(k)` around the cluster's original centroid.
    Adjacent ring members end up at least `min_separation_px` apart.
    """
    if not markers:
        return []
    s = _check_threshold(min_separation_px)
    clusters = overlap_clusters(markers, s)

    out = list(markers)
    for members in clusters:
        k = len(members)
        cx = sum(markers[i].x for i in members) / k
        cy = sum(markers[i].y for i in members) / k
        r = ring_radius(k, s)
        ordered = sorted(members, key=lambda i: (markers[i].id, i))
        for rank, i in enumerate(ordered):
            theta = 2 * math.pi * rank / k
            out[i] = MarkerPosition(id=markers[i].id, x=cx + r * math.cos(theta), y=cy + r * math.sin(theta))

    if clusters:
        logger.debug(
            "Decluttered %d markers in %d overlap clusters (largest=%d)",
            sum(len(c) for c in clusters),
            len(clusters),
            max(len(c) for c in clusters),
        )
    return out
