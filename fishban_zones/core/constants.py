"""Shared pipeline constants, single source of truth.

Centralises coordinate bounds, the default DMS literal pattern and the
numeric defaults that every stage receives through ``ParserConfig``.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# ---------------------------------------------------------------------------
# Stage defaults
# ---------------------------------------------------------------------------

DEFAULT_MAX_SEGMENT_KM: float = 100.0
"""Edges longer than this are treated as a join between unrelated zones."""

DEFAULT_DEDUP_FUZZ_DEG: float = 1e-7
"""Upper bound of the offset applied to repeated ring vertices (degrees)."""

MAX_DEDUP_FUZZ_DEG: float = 1e-5

SPAWNING_KEYWORD = "нерест"
"""Documents whose header mentions spawning are the ones shown on the map."""

# ---------------------------------------------------------------------------
# DMS literal pattern
# ---------------------------------------------------------------------------

# One literal: 55°30'15,5" с.ш.  The pattern must expose the named groups
# ``degrees``, ``minutes``, ``seconds`` and ``marker``.
DMS_LITERAL_PATTERN = (
    r"(?P<degrees>\d+)\s*°\s*"
    r"(?P<minutes>\d+)\s*['′’\"]\s*"
    r"(?P<seconds>\d[\d.,]*?)\s*(?:[\"″”]|'')?\s*"
    r"(?P<marker>[сc]\.\s*ш\.?|ю\.\s*ш\.?|в\.\s*д\.?|з\.\s*д\.?|[NSEW](?![^\W\d_]))"
)

DMS_LITERAL_RE: re.Pattern[str] = re.compile(DMS_LITERAL_PATTERN, re.IGNORECASE)

# Characters allowed between a latitude literal and its longitude literal.
PAIR_GAP_RE: re.Pattern[str] = re.compile(r"[\s,;]*")
