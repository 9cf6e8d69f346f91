"""Coordinate-level data models.

``CoordinateToken`` is the raw text of one latitude + longitude pair as
found by the tokenizer; ``GeoPoint`` is its converted form, and a
``PointSequence`` is the ordered list of points describing one zone.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class Axis(enum.Enum):
    """Which coordinate a direction marker applies to."""

    LATITUDE = "latitude"
    LONGITUDE = "longitude"


class Direction(enum.Enum):
    """Cardinal direction of a DMS literal."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def axis(self) -> Axis:
        if self in (Direction.NORTH, Direction.SOUTH):
            return Axis.LATITUDE
        return Axis.LONGITUDE

    @property
    def sign(self) -> int:
        return -1 if self in (Direction.SOUTH, Direction.WEST) else 1

    @classmethod
    def from_marker(cls, marker: str) -> Direction:
        """Map a direction marker (``с.ш.``, ``в.д.``, ``N`` ...) to a Direction.

        Raises:
            ValueError: If the marker is not recognised.
        """
        key = marker.strip().lower()[:1]
        try:
            return _MARKER_PREFIXES[key]
        except KeyError:
            msg = f"Unknown direction marker: {marker!r}"
            raise ValueError(msg) from None


# First letter of the marker: Cyrillic (с/ю/в/з, plus Latin "c" typed in
# place of Cyrillic "с") and Latin N/S/E/W.
_MARKER_PREFIXES: dict[str, Direction] = {
    "с": Direction.NORTH,
    "c": Direction.NORTH,
    "ю": Direction.SOUTH,
    "в": Direction.EAST,
    "з": Direction.WEST,
    "n": Direction.NORTH,
    "s": Direction.SOUTH,
    "e": Direction.EAST,
    "w": Direction.WEST,
}


@dataclass(frozen=True, slots=True)
class CoordinateToken:
    """Raw text of one point: a latitude literal followed by a longitude literal.

    Attributes:
        text: The full matched substring covering both literals.
        latitude: The latitude literal (e.g. ``55°30'15" с.ш.``).
        longitude: The longitude literal (e.g. ``37°30'0" в.д.``).
        start: Offset of ``text`` within the normalised source text.
    """

    text: str
    latitude: str
    longitude: str
    start: int = 0


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A converted coordinate pair.

    Attributes:
        index: 1-based position in extraction order.
        lat: Latitude in decimal degrees, within [-90, 90].
        lon: Longitude in decimal degrees, within [-180, 180].
        original: Source substring the point was converted from.
    """

    index: int
    lat: float
    lon: float
    original: str = ""

    @property
    def lon_lat(self) -> tuple[float, float]:
        """GeoJSON ordering: ``(lon, lat)``."""
        return (self.lon, self.lat)

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "lat": self.lat,
            "lon": self.lon,
            "original": self.original,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> GeoPoint:
        return cls(
            index=int(data.get("index", 0)),  # type: ignore[arg-type]
            lat=float(data.get("lat", 0.0)),  # type: ignore[arg-type]
            lon=float(data.get("lon", 0.0)),  # type: ignore[arg-type]
            original=str(data.get("original", "")),
        )


@dataclass(frozen=True, slots=True)
class PointSequence:
    """Ordered points describing one zone boundary.

    Order is load-bearing: it encodes the ring or line traversal and is
    never re-sorted by any stage.
    """

    name: str
    points: tuple[GeoPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(self.points)

    @property
    def lon_lats(self) -> list[tuple[float, float]]:
        return [p.lon_lat for p in self.points]

    @property
    def originals(self) -> tuple[str, ...]:
        return tuple(p.original for p in self.points)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "points": [p.to_dict() for p in self.points]}
