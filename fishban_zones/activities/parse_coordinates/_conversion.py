"""DMS → decimal-degree conversion.

Responsibilities:
- Convert degrees / minutes / seconds plus a direction to a signed float
- Split one matched literal into its numeric parts
- Check converted values against WGS 84 bounds
"""

from __future__ import annotations

import math
import re

from fishban_zones.core.constants import (
    DMS_LITERAL_RE,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)
from fishban_zones.core.exceptions import InvalidCoordinateError, MalformedCoordinateError
from fishban_zones.models.geo import Direction

# ---------------------------------------------------------------------------
# Numeric conversion
# ---------------------------------------------------------------------------


def dms_to_decimal(
    degrees: int | str,
    minutes: int | str,
    seconds: float | str,
    direction: Direction | str,
) -> float:
    """Convert a DMS triple to signed decimal degrees.

    ``decimal = degrees + minutes / 60 + seconds / 3600``, negated for
    south and west. No rounding is applied. Minutes and seconds are not
    range-checked.

    Args:
        degrees: Non-negative whole degrees.
        minutes: Whole minutes.
        seconds: Seconds; strings may use a comma as decimal separator.
        direction: A ``Direction`` or a marker such as ``"с.ш."`` / ``"N"``.

    Raises:
        MalformedCoordinateError: If a component is not numeric, degrees
            is negative, or the direction is not recognised.
    """
    deg = _to_int(degrees, "degrees")
    mins = _to_int(minutes, "minutes")
    secs = _to_float(seconds, "seconds")

    if deg < 0:
        msg = f"Degrees must be non-negative, got {deg}"
        raise MalformedCoordinateError(msg, text=str(degrees))

    resolved = _resolve_direction(direction)

    decimal = deg + mins / 60 + secs / 3600
    return -decimal if resolved.sign < 0 else decimal


def parse_literal(
    literal: str, *, pattern: re.Pattern[str] = DMS_LITERAL_RE
) -> tuple[float, Direction]:
    """Convert one DMS literal (``55°30'15,5" с.ш.``) to a signed value.

    Returns:
        ``(decimal_degrees, direction)``.

    Raises:
        MalformedCoordinateError: If the literal does not match ``pattern``
            or its numeric parts cannot be converted.
    """
    match = pattern.search(literal)
    if match is None:
        msg = f"Not a DMS literal: {literal!r}"
        raise MalformedCoordinateError(msg, text=literal)

    direction = _resolve_direction(match.group("marker"))
    try:
        value = dms_to_decimal(
            match.group("degrees"),
            match.group("minutes"),
            match.group("seconds"),
            direction,
        )
    except MalformedCoordinateError as exc:
        raise MalformedCoordinateError(f"{exc.message} in {literal!r}", text=literal) from exc
    return value, direction


# ---------------------------------------------------------------------------
# Bounds validation
# ---------------------------------------------------------------------------


def validate_point(lat: float, lon: float, original: str = "") -> None:
    """Validate that a converted point lies within WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If latitude or longitude is out of range.
    """
    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise InvalidCoordinateError(msg, text=original)
    if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
        msg = f"Longitude {lon} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise InvalidCoordinateError(msg, text=original)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_direction(direction: Direction | str) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction.from_marker(str(direction))
    except ValueError as exc:
        raise MalformedCoordinateError(str(exc), text=str(direction)) from exc


def _to_int(value: object, label: str) -> int:
    if isinstance(value, bool):
        msg = f"Malformed {label}: {value!r}"
        raise MalformedCoordinateError(msg, text=str(value))
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        msg = f"Malformed {label}: expected a whole number, got {value!r}"
        raise MalformedCoordinateError(msg, text=str(value))
    try:
        return int(str(value).strip())
    except ValueError as exc:
        msg = f"Malformed {label}: {value!r}"
        raise MalformedCoordinateError(msg, text=str(value)) from exc


def _to_float(value: object, label: str) -> float:
    if isinstance(value, bool):
        msg = f"Malformed {label}: {value!r}"
        raise MalformedCoordinateError(msg, text=str(value))
    if isinstance(value, int | float):
        number = float(value)
    else:
        try:
            # Trailing separators come from list punctuation ("15,5,").
            number = float(str(value).strip().rstrip(".,").replace(",", ".", 1))
        except ValueError as exc:
            msg = f"Malformed {label}: {value!r}"
            raise MalformedCoordinateError(msg, text=str(value)) from exc
    if not math.isfinite(number):
        msg = f"Malformed {label}: {value!r} is not finite"
        raise MalformedCoordinateError(msg, text=str(value))
    return number
