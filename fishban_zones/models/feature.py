"""Data model for a classified zone feature.

A Feature is the geometry produced for one zone (or one part of a zone,
after the segmenter or sanitizer split it) together with the properties
the rendering layer needs. The geometry type is derived from the
sequence length by the classifier and is never chosen independently.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace


class GeometryType(enum.Enum):
    """GeoJSON geometry types emitted by the classifier."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"


@dataclass(frozen=True, slots=True)
class FeatureProperties:
    """Properties carried by every feature.

    Region and document are referenced by identifier (see
    ``models.catalog.RegionTable``), never embedded.

    Attributes:
        name: Zone label (the table-row header or free-text heading).
        original: Source literals of the points, in order.
        region_id: Identifier of the owning region.
        document_id: Identifier of the owning document.
        row_index: Zero-based row of the zone within its document.
        segment: Zero-based run index after distance segmentation.
        source_feature: Reference of the feature this one was decomposed
            from, empty for features that were not decomposed.
    """

    name: str = ""
    original: tuple[str, ...] = ()
    region_id: str = ""
    document_id: str = ""
    row_index: int | None = None
    segment: int = 0
    source_feature: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "original": list(self.original),
            "region_id": self.region_id,
            "document_id": self.document_id,
            "row_index": self.row_index,
            "segment": self.segment,
            "source_feature": self.source_feature,
        }


@dataclass(frozen=True, slots=True)
class Feature:
    """A single Point, LineString or Polygon feature.

    Attributes:
        geometry_type: Derived geometry type.
        vertices: ``(lon, lat)`` vertices. A Point holds exactly one, a
            LineString holds the ordered line, a Polygon holds its closed
            exterior ring.
        properties: Zone name, source excerpts and owner references.
        interior_rings: Polygon holes. Only produced when a
            self-intersecting ring decomposes into a part with a hole.
    """

    geometry_type: GeometryType
    vertices: list[tuple[float, float]] = field(default_factory=list)
    properties: FeatureProperties = field(default_factory=FeatureProperties)
    interior_rings: list[list[tuple[float, float]]] = field(default_factory=list)

    @property
    def coordinates(self) -> list:
        """Coordinates in GeoJSON nesting for the geometry type."""
        if self.geometry_type is GeometryType.POINT:
            return list(self.vertices[0]) if self.vertices else []
        if self.geometry_type is GeometryType.LINE_STRING:
            return [list(v) for v in self.vertices]
        return [
            [list(v) for v in self.vertices],
            *([list(v) for v in ring] for ring in self.interior_rings),
        ]

    @property
    def reference(self) -> str:
        """Stable identifier used for audit back-references."""
        props = self.properties
        row = props.row_index if props.row_index is not None else 0
        return f"{props.document_id or '-'}#{row}.{props.segment}"

    @property
    def open_vertex_count(self) -> int:
        """Vertex count excluding a synthetic polygon closing vertex."""
        if self.geometry_type is GeometryType.POLYGON and len(self.vertices) > 1:
            if self.vertices[0] == self.vertices[-1]:
                return len(self.vertices) - 1
        return len(self.vertices)

    def with_vertices(self, vertices: list[tuple[float, float]]) -> Feature:
        return replace(self, vertices=list(vertices))

    def with_properties(self, **changes: object) -> Feature:
        return replace(self, properties=replace(self.properties, **changes))

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON ``Feature`` dict."""
        return {
            "type": "Feature",
            "geometry": {
                "type": self.geometry_type.value,
                "coordinates": self.coordinates,
            },
            "properties": self.properties.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Aggregate of features, the unit handed to the rendering layer."""

    features: tuple[Feature, ...] = ()

    def __len__(self) -> int:
        return len(self.features)

    def of_type(self, geometry_type: GeometryType) -> list[Feature]:
        return [f for f in self.features if f.geometry_type is geometry_type]

    def to_geojson(self) -> dict[str, object]:
        """Return a validated GeoJSON ``FeatureCollection`` dict."""
        from fishban_zones.models.geojson import GeoJSONFeatureCollection

        payload = {
            "type": "FeatureCollection",
            "features": [f.to_dict() for f in self.features],
        }
        return GeoJSONFeatureCollection.model_validate(payload).model_dump(mode="json")
