"""Parser configuration loaded from environment variables.

Pattern and threshold constants are threaded through every stage as an
immutable ``ParserConfig`` instead of living in module globals, so the
pipeline stays reentrant and can be exercised with alternate thresholds.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from fishban_zones.core.constants import (
    DEFAULT_DEDUP_FUZZ_DEG,
    DEFAULT_MAX_SEGMENT_KM,
    DMS_LITERAL_RE,
    MAX_DEDUP_FUZZ_DEG,
)
from fishban_zones.core.exceptions import FishbanError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_REQUIRED_GROUPS = frozenset({"degrees", "minutes", "seconds", "marker"})


class ConfigValidationError(FishbanError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration shared by all pipeline stages.

    Attributes:
        max_segment_km: Edge length (km) above which a sequence is split.
        dedup_fuzz_deg: Maximum offset (degrees) applied to repeated vertices.
        split_on_distance: Whether the distance segmenter runs at all.
        repair_polygons: Whether the polygon sanitizer runs at all.
        literal_pattern: Compiled DMS literal regex with the named groups
            ``degrees``, ``minutes``, ``seconds`` and ``marker``.
    """

    max_segment_km: float = DEFAULT_MAX_SEGMENT_KM
    dedup_fuzz_deg: float = DEFAULT_DEDUP_FUZZ_DEG
    split_on_distance: bool = True
    repair_polygons: bool = True
    literal_pattern: re.Pattern[str] = field(default=DMS_LITERAL_RE)

    def __post_init__(self) -> None:
        _validate(self)

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a boolean
                flag cannot be interpreted.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``FISHBAN_MAX_SEGMENT_KM=abc``).
        """
        return cls(
            max_segment_km=float(
                os.getenv("FISHBAN_MAX_SEGMENT_KM", str(DEFAULT_MAX_SEGMENT_KM))
            ),
            dedup_fuzz_deg=float(
                os.getenv("FISHBAN_DEDUP_FUZZ_DEG", str(DEFAULT_DEDUP_FUZZ_DEG))
            ),
            split_on_distance=_env_flag("FISHBAN_SPLIT_ON_DISTANCE", default=True),
            repair_polygons=_env_flag("FISHBAN_REPAIR_POLYGONS", default=True),
        )


def _env_flag(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean flag (true/false)")


def _validate(config: ParserConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_segment_km <= 0:
        raise ConfigValidationError(
            "FISHBAN_MAX_SEGMENT_KM",
            config.max_segment_km,
            "must be > 0 (kilometres)",
        )

    if not 0.0 < config.dedup_fuzz_deg < MAX_DEDUP_FUZZ_DEG:
        raise ConfigValidationError(
            "FISHBAN_DEDUP_FUZZ_DEG",
            config.dedup_fuzz_deg,
            f"must be between 0 and {MAX_DEDUP_FUZZ_DEG} (degrees), exclusive",
        )

    missing = _REQUIRED_GROUPS - set(config.literal_pattern.groupindex)
    if missing:
        raise ConfigValidationError(
            "literal_pattern",
            config.literal_pattern.pattern,
            f"missing named group(s): {', '.join(sorted(missing))}",
        )
