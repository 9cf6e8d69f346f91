"""Coordinate parsing activity: the shared DMS parsing library.

Every caller (table cells, free-text blocks) goes through this package so
ingestion and display never disagree on what counts as a coordinate.

The parsing pipeline is split into focused stages:
- **_tokenizer**: find DMS literals and pair latitude with longitude
- **_conversion**: DMS → signed decimal degrees, WGS 84 bounds check
- **_sequence**: tokens → ordered ``PointSequence`` with lenient drops

Supported literal forms:
- ``55°30'15" с.ш.`` / ``37°30'15,5" в.д.`` (comma decimal seconds)
- optional trailing quote on seconds, optional trailing marker dot
- south / west markers (``ю.ш.``, ``з.д.``) and Latin ``N S E W``
- optional ordinal numbering before each point ("3. ")
"""

from __future__ import annotations

from fishban_zones.activities.parse_coordinates._conversion import (
    dms_to_decimal,
    parse_literal,
    validate_point,
)
from fishban_zones.activities.parse_coordinates._sequence import (
    SequenceResult,
    build_point_sequence,
    parse_points,
)
from fishban_zones.activities.parse_coordinates._tokenizer import (
    TokenizeResult,
    tokenize_points,
)

__all__ = [
    "SequenceResult",
    "TokenizeResult",
    "build_point_sequence",
    "dms_to_decimal",
    "parse_literal",
    "parse_points",
    "tokenize_points",
    "validate_point",
]
