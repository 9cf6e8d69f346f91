"""Point sequence building.

Converts the tokens of one zone into an ordered ``PointSequence``. A
token whose conversion fails is dropped and reported; the remaining
points keep their relative order and are re-numbered 1..n in emission
order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fishban_zones.activities.parse_coordinates._conversion import (
    parse_literal,
    validate_point,
)
from fishban_zones.activities.parse_coordinates._tokenizer import tokenize_points
from fishban_zones.core.config import ParserConfig
from fishban_zones.core.exceptions import MalformedCoordinateError
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.geo import Axis, CoordinateToken, GeoPoint, PointSequence
from fishban_zones.utils.helpers import normalize_text

logger = logging.getLogger("fishban_zones.activities.parse_coordinates")


@dataclass(frozen=True, slots=True)
class SequenceResult:
    """A zone's point sequence plus the diagnostics raised while building it."""

    sequence: PointSequence
    diagnostics: list[Diagnostic] = field(default_factory=list)


def build_point_sequence(
    tokens: list[CoordinateToken],
    *,
    name: str = "",
    config: ParserConfig | None = None,
    document: str = "",
) -> SequenceResult:
    """Convert tokens into an ordered ``PointSequence``.

    Args:
        tokens: Tokens in extraction order (from ``tokenize_points``).
        name: Zone label stored on the sequence.
        config: Parser configuration; supplies the literal pattern.
        document: Owning document identifier, used only in diagnostics.

    Returns:
        A ``SequenceResult``. Points are indexed from 1 in emission order,
        ignoring any numbering present in the source text.
    """
    config = config or ParserConfig()
    points: list[GeoPoint] = []
    diagnostics: list[Diagnostic] = []

    for token in tokens:
        try:
            point = _token_to_point(token, len(points) + 1, config)
        except MalformedCoordinateError as exc:
            logger.warning(
                "Skipping malformed point '%s' in zone '%s': %s",
                token.text,
                name,
                exc,
            )
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_COORDINATE,
                    message=exc.message,
                    text=token.text,
                    zone=name,
                    document=document,
                    details={"code": exc.code},
                )
            )
            continue
        points.append(point)

    return SequenceResult(
        sequence=PointSequence(name=name, points=tuple(points)),
        diagnostics=diagnostics,
    )


def parse_points(
    text: str,
    *,
    name: str = "",
    config: ParserConfig | None = None,
    document: str = "",
) -> SequenceResult:
    """Normalise ``text``, tokenise it and build the point sequence.

    This is the single entry point shared by table cells and free text.
    """
    config = config or ParserConfig()
    tokenized = tokenize_points(
        normalize_text(text), config=config, zone=name, document=document
    )
    built = build_point_sequence(
        tokenized.tokens, name=name, config=config, document=document
    )
    return SequenceResult(
        sequence=built.sequence,
        diagnostics=[*tokenized.diagnostics, *built.diagnostics],
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _token_to_point(token: CoordinateToken, index: int, config: ParserConfig) -> GeoPoint:
    """Convert one token.  Raises ``MalformedCoordinateError``."""
    lat, lat_direction = parse_literal(token.latitude, pattern=config.literal_pattern)
    lon, lon_direction = parse_literal(token.longitude, pattern=config.literal_pattern)

    if lat_direction.axis is not Axis.LATITUDE or lon_direction.axis is not Axis.LONGITUDE:
        msg = (
            f"Expected latitude then longitude, got "
            f"{lat_direction.value} then {lon_direction.value}"
        )
        raise MalformedCoordinateError(msg, text=token.text)

    validate_point(lat, lon, token.text)
    return GeoPoint(index=index, lat=lat, lon=lon, original=token.text)
