"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- CoordinateToken / GeoPoint / PointSequence: extracted coordinates
- Feature / FeatureCollection: classified zone geometry
- Diagnostic: structured non-fatal conditions
- Region / Document / TableRow / RegionTable: source catalog
"""

from fishban_zones.models.catalog import Document, Region, RegionTable, TableRow
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.feature import (
    Feature,
    FeatureCollection,
    FeatureProperties,
    GeometryType,
)
from fishban_zones.models.geo import (
    Axis,
    CoordinateToken,
    Direction,
    GeoPoint,
    PointSequence,
)

__all__ = [
    "Axis",
    "CoordinateToken",
    "Diagnostic",
    "DiagnosticKind",
    "Direction",
    "Document",
    "Feature",
    "FeatureCollection",
    "FeatureProperties",
    "GeoPoint",
    "GeometryType",
    "PointSequence",
    "Region",
    "RegionTable",
    "TableRow",
]
