"""Unified pipeline exception taxonomy.

Provides a shared base exception hierarchy for every pipeline stage.
Every domain exception inherits from ``FishbanError`` and carries
structured context fields (stage, code, offending text, owning zone)
so the zone pipeline can turn it into a diagnostic without losing
information.

Taxonomy categories
-------------------
- ``ValidationError`` : malformed input text or coordinates.
- ``PermanentError``  : a stage could not complete for this input.

No exception in this package is allowed to unwind past a single zone:
the orchestrator converts them to ``Diagnostic`` records.
"""

from __future__ import annotations


class FishbanError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"parse_coordinates"``, ``"sanitize_polygon"``).
        code: Machine-readable error code (e.g. ``"MALFORMED_COORDINATE"``).
        text: The offending source substring, when there is one.
        zone: Name of the zone being processed, when known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        text: str = "",
        zone: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.text = text
        self.zone = zone
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "text": self.text,
            "zone": self.zone,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(FishbanError):
    """Input or domain-model validation failure."""


class PermanentError(FishbanError):
    """A stage could not complete for this input."""


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class MalformedCoordinateError(ValidationError):
    """Raised when a DMS literal cannot be parsed into numbers."""

    default_stage = "parse_coordinates"
    default_code = "MALFORMED_COORDINATE"


class InvalidCoordinateError(MalformedCoordinateError):
    """Raised when a converted coordinate falls outside WGS 84 bounds."""

    default_code = "COORDINATE_OUT_OF_RANGE"


class PolygonRepairError(PermanentError):
    """Raised when a self-intersecting ring cannot be decomposed."""

    default_stage = "sanitize_polygon"
    default_code = "POLYGON_REPAIR_FAILED"
