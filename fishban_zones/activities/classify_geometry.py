"""Geometry classification.

The geometry type of a zone is a pure function of how many points it has:

- 0 points → no feature
- 1 point  → Point
- 2 points → LineString (a crossing line, e.g. a river cut-off)
- 3+       → Polygon, ring closed by repeating the first vertex if needed

The classifier runs again on every run produced by the distance
segmenter, so a split-off pair becomes a LineString even when its parent
was a polygon candidate.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from fishban_zones.models.feature import Feature, FeatureProperties, GeometryType

if TYPE_CHECKING:
    from fishban_zones.models.geo import PointSequence

MIN_POLYGON_POINTS = 3


def geometry_type_for(count: int) -> GeometryType | None:
    """Return the geometry type for a sequence of ``count`` points."""
    if count <= 0:
        return None
    if count == 1:
        return GeometryType.POINT
    if count < MIN_POLYGON_POINTS:
        return GeometryType.LINE_STRING
    return GeometryType.POLYGON


def close_ring(vertices: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Return ``vertices`` with the first vertex appended if the ring is open."""
    if vertices and vertices[0] != vertices[-1]:
        return [*vertices, vertices[0]]
    return list(vertices)


def classify_coordinates(
    vertices: list[tuple[float, float]],
    *,
    properties: FeatureProperties | None = None,
) -> Feature | None:
    """Classify raw ``(lon, lat)`` vertices into a Feature.

    Returns:
        The Feature, or ``None`` for an empty list.
    """
    geometry_type = geometry_type_for(len(vertices))
    if geometry_type is None:
        return None

    if geometry_type is GeometryType.POLYGON:
        vertices = close_ring(vertices)

    return Feature(
        geometry_type=geometry_type,
        vertices=list(vertices),
        properties=properties or FeatureProperties(),
    )


def classify_sequence(
    sequence: PointSequence,
    *,
    properties: FeatureProperties | None = None,
) -> Feature | None:
    """Classify a ``PointSequence`` into a Feature.

    When ``properties`` is omitted the feature is named after the
    sequence; either way ``original`` is filled from the points.
    """
    base = properties or FeatureProperties(name=sequence.name)
    if not base.original:
        base = replace(base, original=sequence.originals)
    return classify_coordinates(sequence.lon_lats, properties=base)
