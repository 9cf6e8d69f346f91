"""Polygon sanitisation.

Runs on Polygon features after ring closure and after distance
segmentation:

1. **Deduplication with fuzzing**: a vertex repeating an earlier vertex
   of the same ring is moved a deterministic sub-centimetre distance
   (``dedup_fuzz_deg * position / ring_length``) along its outgoing edge,
   toward the next distinct vertex. The copy stays on the drawn boundary,
   so GEOS never sees a zero-length edge or a folded-back spike.
2. **Self-intersection resolution**: an invalid ring is decomposed with
   ``shapely.validation.make_valid`` into simple polygons covering the
   same area. Each part inherits the source properties plus a
   ``source_feature`` back-reference.

If decomposition fails the input feature is returned unchanged with a
``POLYGON_REPAIR_FAILURE`` diagnostic: a distorted zone on the map is
preferred to a missing one.

Sanitising an already simple, duplicate-free polygon returns it as is.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fishban_zones.activities.classify_geometry import close_ring
from fishban_zones.core.config import ParserConfig
from fishban_zones.core.exceptions import PolygonRepairError
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.feature import Feature, GeometryType

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("fishban_zones.activities.sanitize_polygon")

# Halvings tried when a fuzzed vertex lands on another existing vertex.
_MAX_FUZZ_ATTEMPTS = 8


@dataclass(frozen=True, slots=True)
class SanitizeResult:
    """Features emitted for one input polygon."""

    features: list[Feature] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def was_decomposed(self) -> bool:
        return any(f.properties.source_feature for f in self.features)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sanitize_polygon(
    feature: Feature,
    *,
    config: ParserConfig | None = None,
) -> SanitizeResult:
    """Deduplicate and, if needed, decompose one polygon feature.

    Non-polygon features pass through untouched.

    Args:
        feature: A classified feature.
        config: Parser configuration; supplies ``dedup_fuzz_deg``.

    Returns:
        A ``SanitizeResult`` with one or more features.
    """
    if feature.geometry_type is not GeometryType.POLYGON:
        return SanitizeResult(features=[feature])

    config = config or ParserConfig()
    name = feature.properties.name

    deduplicated = fuzz_duplicate_vertices(feature.vertices, fuzz_deg=config.dedup_fuzz_deg)
    candidate = feature
    if deduplicated != feature.vertices:
        logger.info("Fuzzed repeated vertices in zone '%s'", name)
        candidate = feature.with_vertices(deduplicated)

    try:
        parts = decompose_ring(candidate.vertices, candidate.interior_rings, name)
    except Exception as exc:
        logger.warning(
            "Polygon repair failed for zone '%s', keeping original geometry: %s",
            name,
            exc,
        )
        return SanitizeResult(
            features=[feature],
            diagnostics=[
                Diagnostic(
                    kind=DiagnosticKind.POLYGON_REPAIR_FAILURE,
                    message=f"Polygon repair failed: {exc}",
                    zone=name,
                    document=feature.properties.document_id,
                    details={"reference": feature.reference},
                )
            ],
        )

    if parts is None:
        return SanitizeResult(features=[candidate])

    reference = feature.reference
    features = [
        Feature(
            geometry_type=GeometryType.POLYGON,
            vertices=exterior,
            properties=candidate.properties,
            interior_rings=holes,
        ).with_properties(source_feature=reference)
        for exterior, holes in parts
    ]
    logger.warning(
        "Decomposed self-intersecting zone '%s' into %d simple polygon(s)",
        name,
        len(features),
    )
    return SanitizeResult(features=features)


# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------


def fuzz_duplicate_vertices(
    ring: list[tuple[float, float]], *, fuzz_deg: float
) -> list[tuple[float, float]]:
    """Move every vertex that repeats an earlier vertex of the same ring.

    The repeat slides ``fuzz_deg * position / ring_length`` degrees along
    its outgoing edge, toward the next distinct vertex. Staying on an
    existing edge means the copy can never fold back across the incoming
    edge. If that spot is taken, the step is halved, then the previous
    distinct vertex is tried instead.

    The closing vertex of a closed ring is not treated as a repeat; the
    result is re-closed if the input was closed.

    Args:
        ring: ``(lon, lat)`` vertices, closed or open.
        fuzz_deg: Upper bound of the displacement in degrees.

    Returns:
        A new vertex list; equal to ``ring`` when nothing repeats.
    """
    closed = len(ring) > 1 and ring[0] == ring[-1]
    open_ring = list(ring[:-1] if closed else ring)
    if not open_ring:
        return list(ring)

    seen: set[tuple[float, float]] = set()
    result: list[tuple[float, float]] = []
    for position, vertex in enumerate(open_ring):
        if vertex in seen:
            vertex = _fuzz(position, open_ring, fuzz_deg, seen)
        seen.add(vertex)
        result.append(vertex)

    return close_ring(result) if closed else result


def _fuzz(
    position: int,
    open_ring: list[tuple[float, float]],
    fuzz_deg: float,
    seen: set[tuple[float, float]],
) -> tuple[float, float]:
    # position >= 1 here: the first vertex can never be a repeat.
    vertex = open_ring[position]
    offset = fuzz_deg * position / len(open_ring)

    for direction in (1, -1):
        target = _neighbour(open_ring, position, direction)
        if target is None:
            continue
        step = min(offset, math.dist(vertex, target) / 2)
        for _ in range(_MAX_FUZZ_ATTEMPTS + 1):
            candidate = _towards(vertex, target, step)
            if candidate != vertex and candidate not in seen:
                return candidate
            step /= 2

    logger.warning(
        "Could not move repeated vertex %s off existing vertices; kept as is",
        vertex,
    )
    return vertex


def _neighbour(
    open_ring: list[tuple[float, float]], position: int, direction: int
) -> tuple[float, float] | None:
    """Nearest vertex different from ``open_ring[position]``, walking ``direction``."""
    vertex = open_ring[position]
    count = len(open_ring)
    for step in range(1, count):
        other = open_ring[(position + direction * step) % count]
        if other != vertex:
            return other
    return None


def _towards(
    vertex: tuple[float, float], target: tuple[float, float], distance: float
) -> tuple[float, float]:
    dx = target[0] - vertex[0]
    dy = target[1] - vertex[1]
    length = math.hypot(dx, dy)
    return (vertex[0] + distance * dx / length, vertex[1] + distance * dy / length)


# ---------------------------------------------------------------------------
# Decomposition
# ---------------------------------------------------------------------------


def decompose_ring(
    exterior: list[tuple[float, float]],
    interior: list[list[tuple[float, float]]],
    zone: str,
) -> list[tuple[list[tuple[float, float]], list[list[tuple[float, float]]]]] | None:
    """Split an invalid polygon into simple polygons.

    Returns:
        ``None`` when the polygon is already valid, otherwise a list of
        ``(exterior, holes)`` pairs for each polygonal part.

    Raises:
        PolygonRepairError: If the ring cannot be built or repair leaves
            no polygonal area.
    """
    from shapely.geometry import Polygon
    from shapely.validation import make_valid

    try:
        poly = Polygon(exterior, interior)
    except Exception as exc:
        msg = f"Cannot create polygon for zone '{zone}': {exc}"
        raise PolygonRepairError(msg, zone=zone) from exc

    if poly.is_valid:
        return None

    repaired = make_valid(poly)
    polygons = _polygonal_parts(repaired)
    if not polygons:
        msg = f"Geometry became {repaired.geom_type} after make_valid() for zone '{zone}'"
        raise PolygonRepairError(msg, zone=zone)

    return [
        (
            _ring_coords(part.exterior.coords),
            [_ring_coords(hole.coords) for hole in part.interiors],
        )
        for part in polygons
    ]


def _polygonal_parts(geometry: BaseGeometry) -> list:
    """Flatten a repaired geometry into its non-empty Polygon parts."""
    if geometry.is_empty:
        return []
    if geometry.geom_type == "Polygon":
        return [geometry] if geometry.area > 0 else []
    if geometry.geom_type in ("MultiPolygon", "GeometryCollection"):
        parts = []
        for sub in geometry.geoms:
            parts.extend(_polygonal_parts(sub))
        return parts
    return []


def _ring_coords(coords: object) -> list[tuple[float, float]]:
    return [(float(c[0]), float(c[1])) for c in coords]  # type: ignore[attr-defined]
