"""Pydantic GeoJSON export schema.

``FeatureCollection.to_geojson()`` validates its output through these
models so whatever is handed to storage or a map layer is structurally
sound: coordinate nesting matches the geometry type, every position is
``[lon, lat]`` within WGS 84 bounds, and polygon rings are closed.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from fishban_zones.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)


def _check_position(position: list[float]) -> None:
    if len(position) != 2:
        msg = f"Position must be [lon, lat], got {position!r}"
        raise ValueError(msg)
    lon, lat = position
    if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
        msg = f"Longitude {lon} out of WGS 84 range"
        raise ValueError(msg)
    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = f"Latitude {lat} out of WGS 84 range"
        raise ValueError(msg)


class GeoJSONGeometry(BaseModel):
    """GeoJSON geometry restricted to the three types the pipeline emits.

    Attributes:
        type: ``"Point"``, ``"LineString"`` or ``"Polygon"``.
        coordinates: Nested coordinate arrays matching ``type``.
    """

    type: Literal["Point", "LineString", "Polygon"]
    coordinates: list[float] | list[list[float]] | list[list[list[float]]]

    @model_validator(mode="after")
    def _check_nesting(self) -> GeoJSONGeometry:
        coords: Any = self.coordinates
        if self.type == "Point":
            _check_position(coords)
        elif self.type == "LineString":
            if len(coords) < 2:
                msg = "LineString needs at least 2 positions"
                raise ValueError(msg)
            for position in coords:
                _check_position(position)
        else:
            for ring in coords:
                # Rings left degenerate by a failed repair are still exported;
                # only closure is enforced.
                if not ring or ring[0] != ring[-1]:
                    msg = "Polygon ring is not closed"
                    raise ValueError(msg)
                for position in ring:
                    _check_position(position)
        return self


class GeoJSONFeature(BaseModel):
    """GeoJSON ``Feature``."""

    type: Literal["Feature"] = "Feature"
    geometry: GeoJSONGeometry
    properties: dict[str, Any] = Field(default_factory=dict)


class GeoJSONFeatureCollection(BaseModel):
    """GeoJSON ``FeatureCollection``."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[GeoJSONFeature] = Field(default_factory=list)
