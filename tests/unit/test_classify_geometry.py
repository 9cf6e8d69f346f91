"""Tests for point-count geometry classification."""

from __future__ import annotations

import pytest

from fishban_zones.activities.classify_geometry import (
    classify_coordinates,
    classify_sequence,
    close_ring,
    geometry_type_for,
)
from fishban_zones.models.feature import FeatureProperties, GeometryType


class TestGeometryTypeFor:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, None),
            (1, GeometryType.POINT),
            (2, GeometryType.LINE_STRING),
            (3, GeometryType.POLYGON),
            (12, GeometryType.POLYGON),
        ],
    )
    def test_count(self, count: int, expected: GeometryType | None) -> None:
        assert geometry_type_for(count) is expected


class TestCloseRing:
    def test_open_ring_closed(self) -> None:
        assert close_ring([(0, 0), (1, 0), (1, 1)]) == [(0, 0), (1, 0), (1, 1), (0, 0)]

    def test_closed_ring_unchanged(self) -> None:
        ring = [(0, 0), (1, 0), (1, 1), (0, 0)]
        assert close_ring(ring) == ring

    def test_empty(self) -> None:
        assert close_ring([]) == []


class TestClassifyCoordinates:
    def test_empty(self) -> None:
        assert classify_coordinates([]) is None

    def test_point(self) -> None:
        feature = classify_coordinates([(37.5, 55.5)])
        assert feature is not None
        assert feature.geometry_type is GeometryType.POINT
        assert feature.coordinates == [37.5, 55.5]

    def test_line_string(self) -> None:
        feature = classify_coordinates([(37.5, 55.5), (37.6, 55.5)])
        assert feature is not None
        assert feature.geometry_type is GeometryType.LINE_STRING
        assert feature.coordinates == [[37.5, 55.5], [37.6, 55.5]]

    def test_polygon_closed(self) -> None:
        feature = classify_coordinates([(0, 0), (1, 0), (1, 1)])
        assert feature is not None
        assert feature.geometry_type is GeometryType.POLYGON
        assert feature.vertices[0] == feature.vertices[-1]
        assert len(feature.vertices) == 4
        assert feature.open_vertex_count == 3

    def test_already_closed_not_doubled(self) -> None:
        feature = classify_coordinates([(0, 0), (1, 0), (1, 1), (0, 0)])
        assert feature is not None
        assert len(feature.vertices) == 4

    def test_vertex_order_kept(self) -> None:
        vertices = [(0, 0), (0, 1), (1, 1), (1, 0)]
        feature = classify_coordinates(vertices)
        assert feature is not None
        assert feature.vertices[:4] == vertices


class TestClassifySequence:
    def test_named_after_sequence(self, sequence_factory) -> None:
        feature = classify_sequence(sequence_factory([(37.0, 55.0)], name="Омут"))
        assert feature is not None
        assert feature.properties.name == "Омут"
        assert feature.properties.original == ("p1",)

    def test_explicit_properties(self, sequence_factory, properties: FeatureProperties) -> None:
        sequence = sequence_factory([(37.0, 55.0), (37.1, 55.0)])
        feature = classify_sequence(sequence, properties=properties)
        assert feature is not None
        assert feature.properties.document_id == properties.document_id
        assert feature.properties.original == ("p1", "p2")

    def test_empty_sequence(self, sequence_factory) -> None:
        assert classify_sequence(sequence_factory([])) is None
