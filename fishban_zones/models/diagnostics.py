"""Structured, non-fatal pipeline diagnostics.

Nothing in the zone pipeline is fatal to a batch. Conditions that would
otherwise be exceptions (a malformed literal, an implausible edge, a
failed polygon repair) are recorded as ``Diagnostic`` values so the
caller can log them or show them to an operator.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class DiagnosticKind(enum.Enum):
    """Kinds of non-fatal condition raised by the pipeline."""

    MALFORMED_COORDINATE = "malformed_coordinate"
    UNMATCHED_PAIR = "unmatched_pair"
    EMPTY_POINT_LIST = "empty_point_list"
    ANOMALOUS_SEGMENT_DISTANCE = "anomalous_segment_distance"
    POLYGON_REPAIR_FAILURE = "polygon_repair_failure"
    HYPHEN_NAME_HEURISTIC = "hyphen_name_heuristic"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single non-fatal condition.

    Attributes:
        kind: What happened.
        message: Human-readable description.
        text: Offending source text, if any.
        zone: Name of the zone being processed.
        document: Identifier of the owning document.
        details: Extra numeric or string facts (e.g. ``max_distance_km``).
    """

    kind: DiagnosticKind
    message: str
    text: str = ""
    zone: str = ""
    document: str = ""
    details: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "text": self.text,
            "zone": self.zone,
            "document": self.document,
            "details": dict(self.details),
        }
