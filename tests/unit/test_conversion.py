"""Tests for DMS → decimal conversion.

Covers:
- The conversion formula, without rounding
- Sign handling for south / west
- Comma decimal seconds and trailing list punctuation
- Direction markers (Cyrillic, Latin, Latin "c" for Cyrillic "с")
- Malformed components and WGS 84 bounds
"""

from __future__ import annotations

import math

import pytest

from fishban_zones.activities.parse_coordinates import (
    dms_to_decimal,
    parse_literal,
    validate_point,
)
from fishban_zones.core.exceptions import InvalidCoordinateError, MalformedCoordinateError
from fishban_zones.models.geo import Axis, Direction


class TestDmsToDecimal:
    """The conversion formula."""

    def test_formula(self) -> None:
        assert dms_to_decimal(41, 30, 15.5, Direction.NORTH) == 41 + 30 / 60 + 15.5 / 3600

    def test_whole_degrees(self) -> None:
        assert dms_to_decimal(55, 0, 0, Direction.EAST) == 55.0

    def test_south_is_negative(self) -> None:
        assert dms_to_decimal(33, 52, 4, Direction.SOUTH) == -(33 + 52 / 60 + 4 / 3600)

    def test_west_is_negative(self) -> None:
        assert dms_to_decimal(70, 0, 0, Direction.WEST) == -70.0

    def test_string_components(self) -> None:
        assert dms_to_decimal("55", "30", "15,5", "с.ш.") == 55 + 30 / 60 + 15.5 / 3600

    def test_trailing_separator_on_seconds(self) -> None:
        assert dms_to_decimal("55", "30", "15,", "с.ш.") == 55 + 30 / 60 + 15 / 3600

    def test_minutes_not_range_checked(self) -> None:
        """Out-of-range minutes are converted as written."""
        assert dms_to_decimal(10, 75, 0, Direction.NORTH) == 10 + 75 / 60

    def test_integral_float_degrees(self) -> None:
        assert dms_to_decimal(55.0, 0, 0, Direction.NORTH) == 55.0


class TestDmsToDecimalErrors:
    """Malformed components raise ``MalformedCoordinateError``."""

    def test_non_numeric_seconds(self) -> None:
        with pytest.raises(MalformedCoordinateError) as exc_info:
            dms_to_decimal(55, 30, "abc", Direction.NORTH)
        assert exc_info.value.code == "MALFORMED_COORDINATE"

    def test_negative_degrees(self) -> None:
        with pytest.raises(MalformedCoordinateError, match="non-negative"):
            dms_to_decimal(-5, 0, 0, Direction.NORTH)

    def test_fractional_degrees(self) -> None:
        with pytest.raises(MalformedCoordinateError, match="whole number"):
            dms_to_decimal(55.5, 0, 0, Direction.NORTH)

    def test_bool_rejected(self) -> None:
        with pytest.raises(MalformedCoordinateError):
            dms_to_decimal(True, 0, 0, Direction.NORTH)

    def test_infinite_seconds(self) -> None:
        with pytest.raises(MalformedCoordinateError, match="not finite"):
            dms_to_decimal(55, 0, math.inf, Direction.NORTH)

    def test_unknown_marker(self) -> None:
        with pytest.raises(MalformedCoordinateError, match="Unknown direction marker"):
            dms_to_decimal(55, 0, 0, "х.з.")

    def test_error_stage(self) -> None:
        with pytest.raises(MalformedCoordinateError) as exc_info:
            dms_to_decimal("x", 0, 0, Direction.NORTH)
        assert exc_info.value.stage == "parse_coordinates"
        assert exc_info.value.text == "x"


class TestDirectionMarkers:
    """Marker → Direction mapping."""

    @pytest.mark.parametrize(
        ("marker", "expected"),
        [
            ("с.ш.", Direction.NORTH),
            ("c.ш.", Direction.NORTH),
            ("ю.ш.", Direction.SOUTH),
            ("в.д.", Direction.EAST),
            ("з.д.", Direction.WEST),
            ("N", Direction.NORTH),
            ("s", Direction.SOUTH),
            ("E", Direction.EAST),
            ("W", Direction.WEST),
        ],
    )
    def test_marker(self, marker: str, expected: Direction) -> None:
        assert Direction.from_marker(marker) is expected

    def test_axis(self) -> None:
        assert Direction.NORTH.axis is Axis.LATITUDE
        assert Direction.WEST.axis is Axis.LONGITUDE

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown direction marker"):
            Direction.from_marker("?")


class TestParseLiteral:
    """One literal → signed value."""

    def test_north(self) -> None:
        value, direction = parse_literal("55°30'15,5\" с.ш.")
        assert direction is Direction.NORTH
        assert value == pytest.approx(55 + 30 / 60 + 15.5 / 3600)

    def test_no_seconds_quote(self) -> None:
        value, _ = parse_literal("37°30'15 в.д.")
        assert value == pytest.approx(37 + 30 / 60 + 15 / 3600)

    def test_marker_without_final_dot(self) -> None:
        _, direction = parse_literal("37°30'15\" в.д")
        assert direction is Direction.EAST

    def test_latin_marker(self) -> None:
        value, direction = parse_literal("70°0'0\" W")
        assert direction is Direction.WEST
        assert value == -70.0

    def test_not_a_literal(self) -> None:
        with pytest.raises(MalformedCoordinateError, match="Not a DMS literal"):
            parse_literal("fifty-five degrees")


class TestValidatePoint:
    """WGS 84 bounds."""

    def test_valid(self) -> None:
        validate_point(55.0, 37.0)

    def test_bounds_inclusive(self) -> None:
        validate_point(90.0, -180.0)

    def test_latitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError) as exc_info:
            validate_point(91.0, 37.0, "91°0'0\" с.ш.")
        assert exc_info.value.code == "COORDINATE_OUT_OF_RANGE"
        assert exc_info.value.text == "91°0'0\" с.ш."

    def test_longitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Longitude"):
            validate_point(55.0, 181.0)

    def test_is_a_malformed_coordinate(self) -> None:
        """Out-of-range points fail conversion like any malformed point."""
        assert issubclass(InvalidCoordinateError, MalformedCoordinateError)
