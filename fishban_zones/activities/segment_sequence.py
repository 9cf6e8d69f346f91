"""Distance segmentation of polygon candidates.

Source documents sometimes concatenate the boundaries of physically
disjoint zones under one coordinate list. The tell-tale is an edge far
longer than any real boundary segment. This stage measures every edge of
a polygon candidate on the WGS 84 ellipsoid and cuts the sequence at each
edge longer than the configured threshold; the cut edge belongs to
neither run. Each run is classified on its own afterwards.

The closing edge (last vertex back to the first) is never measured.
This stage never raises: on any measurement failure the original
sequence is returned as the single run, with a diagnostic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fishban_zones.activities.classify_geometry import MIN_POLYGON_POINTS
from fishban_zones.core.constants import DEFAULT_MAX_SEGMENT_KM
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.geo import GeoPoint, PointSequence

logger = logging.getLogger("fishban_zones.activities.segment_sequence")

METRES_PER_KM = 1_000.0


@dataclass(frozen=True, slots=True)
class SegmentResult:
    """Runs produced from one sequence.

    Attributes:
        runs: Sub-sequences in source order. A single run equal to the
            input when nothing was cut.
        diagnostics: At most one ``ANOMALOUS_SEGMENT_DISTANCE`` entry.
        max_distance_km: Longest measured edge, 0.0 when nothing was measured.
    """

    runs: list[PointSequence] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    max_distance_km: float = 0.0

    @property
    def was_split(self) -> bool:
        return len(self.runs) > 1


def edge_lengths_km(vertices: list[tuple[float, float]]) -> list[float]:
    """Geodesic length of each consecutive edge, in kilometres.

    Uses ``pyproj.Geod`` on the WGS 84 ellipsoid.

    Args:
        vertices: ``(lon, lat)`` vertices in traversal order.

    Returns:
        ``len(vertices) - 1`` lengths (empty for fewer than two vertices).
    """
    if len(vertices) < 2:
        return []

    from pyproj import Geod

    geod = Geod(ellps="WGS84")
    lons = [v[0] for v in vertices]
    lats = [v[1] for v in vertices]
    return [abs(d) / METRES_PER_KM for d in geod.line_lengths(lons, lats)]


def segment_sequence(
    sequence: PointSequence,
    *,
    max_segment_km: float = DEFAULT_MAX_SEGMENT_KM,
    document: str = "",
) -> SegmentResult:
    """Split a polygon candidate at every implausibly long edge.

    Args:
        sequence: The zone's points in source order.
        max_segment_km: Edges strictly longer than this are cut.
        document: Owning document identifier, used only in diagnostics.

    Returns:
        A ``SegmentResult``. Sequences shorter than three points are
        returned untouched.
    """
    if len(sequence) < MIN_POLYGON_POINTS:
        return SegmentResult(runs=[sequence])

    points = list(sequence.points)
    if points[0].lon_lat == points[-1].lon_lat:
        points = points[:-1]

    try:
        lengths = edge_lengths_km([p.lon_lat for p in points])
    except Exception as exc:
        logger.warning(
            "Edge measurement failed for zone '%s' in %s, keeping sequence whole: %s",
            sequence.name,
            document,
            exc,
        )
        return SegmentResult(
            runs=[sequence],
            diagnostics=[
                Diagnostic(
                    kind=DiagnosticKind.ANOMALOUS_SEGMENT_DISTANCE,
                    message=f"Edge measurement failed: {exc}",
                    zone=sequence.name,
                    document=document,
                )
            ],
        )

    max_distance_km = max(lengths, default=0.0)
    cut_after = [i for i, length in enumerate(lengths) if length > max_segment_km]
    if not cut_after:
        return SegmentResult(runs=[sequence], max_distance_km=max_distance_km)

    runs = [
        PointSequence(name=sequence.name, points=tuple(run))
        for run in _split_points(points, cut_after)
        if run
    ]

    logger.warning(
        "Split zone '%s' in %s into %d run(s): %d edge(s) over %.1f km, longest %.1f km",
        sequence.name,
        document,
        len(runs),
        len(cut_after),
        max_segment_km,
        max_distance_km,
    )
    diagnostic = Diagnostic(
        kind=DiagnosticKind.ANOMALOUS_SEGMENT_DISTANCE,
        message=(
            f"Edge of {max_distance_km:.1f} km exceeds {max_segment_km:.1f} km; "
            f"sequence split into {len(runs)} run(s)"
        ),
        zone=sequence.name,
        document=document,
        details={
            "max_distance_km": max_distance_km,
            "threshold_km": max_segment_km,
            "cut_edges": len(cut_after),
            "runs": len(runs),
        },
    )
    return SegmentResult(runs=runs, diagnostics=[diagnostic], max_distance_km=max_distance_km)


def _split_points(points: list[GeoPoint], cut_after: list[int]) -> list[list[GeoPoint]]:
    """Cut ``points`` between ``i`` and ``i + 1`` for every ``i`` in ``cut_after``."""
    runs: list[list[GeoPoint]] = []
    start = 0
    for i in cut_after:
        runs.append(points[start : i + 1])
        start = i + 1
    runs.append(points[start:])
    return runs
