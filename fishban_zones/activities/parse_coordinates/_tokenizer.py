"""DMS token extraction.

Finds every DMS literal in normalised text and pairs them into points.
A point is a latitude literal immediately followed by a longitude
literal; anything else is discarded with an ``UNMATCHED_PAIR``
diagnostic. Leading ordinal numbering ("3. ") is never part of a token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fishban_zones.core.config import ParserConfig
from fishban_zones.core.constants import PAIR_GAP_RE
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.geo import Axis, CoordinateToken, Direction

if TYPE_CHECKING:
    import re

logger = logging.getLogger("fishban_zones.activities.parse_coordinates")


@dataclass(frozen=True, slots=True)
class TokenizeResult:
    """Tokens found in one text plus the literals that had to be discarded."""

    tokens: list[CoordinateToken] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def tokenize_points(
    text: str,
    *,
    config: ParserConfig | None = None,
    zone: str = "",
    document: str = "",
) -> TokenizeResult:
    """Extract ordered latitude/longitude literal pairs from ``text``.

    Args:
        text: Normalised text (see ``normalize_text``).
        config: Parser configuration; supplies the literal pattern.
        zone: Owning zone name, used only in diagnostics.
        document: Owning document identifier, used only in diagnostics.

    Returns:
        A ``TokenizeResult``. Text without literals yields no tokens and
        no diagnostics.
    """
    config = config or ParserConfig()
    if not text:
        return TokenizeResult()

    literals = list(config.literal_pattern.finditer(text))
    tokens: list[CoordinateToken] = []
    diagnostics: list[Diagnostic] = []

    i = 0
    while i < len(literals):
        current = literals[i]
        axis = _axis_of(current)

        if axis is Axis.LATITUDE and i + 1 < len(literals):
            following = literals[i + 1]
            gap = text[current.end() : following.start()]
            if _axis_of(following) is Axis.LONGITUDE and PAIR_GAP_RE.fullmatch(gap):
                tokens.append(
                    CoordinateToken(
                        text=text[current.start() : following.end()],
                        latitude=current.group(0),
                        longitude=following.group(0),
                        start=current.start(),
                    )
                )
                i += 2
                continue

        diagnostics.append(_unmatched(current, axis, zone, document))
        i += 1

    return TokenizeResult(tokens=tokens, diagnostics=diagnostics)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _axis_of(match: re.Match[str]) -> Axis | None:
    try:
        return Direction.from_marker(match.group("marker")).axis
    except ValueError:
        return None


def _unmatched(
    match: re.Match[str], axis: Axis | None, zone: str, document: str
) -> Diagnostic:
    if axis is Axis.LATITUDE:
        message = "Latitude literal is not immediately followed by a longitude literal"
    elif axis is Axis.LONGITUDE:
        message = "Longitude literal has no preceding latitude literal"
    else:
        message = "Literal has an unrecognised direction marker"

    logger.warning(
        "Discarding unmatched literal '%s' in zone '%s': %s",
        match.group(0),
        zone,
        message,
    )
    return Diagnostic(
        kind=DiagnosticKind.UNMATCHED_PAIR,
        message=message,
        text=match.group(0),
        zone=zone,
        document=document,
    )
