"""Zone pipeline orchestrator.

Coordinates the pipeline stages for one zone, one document or a batch
of documents:

1. Parse coordinates: tokenise, convert, build the point sequence
2. Segment: cut polygon candidates at implausibly long edges
3. Classify: Point / LineString / Polygon per run
4. Sanitise: fuzz repeated vertices, decompose self-intersections

Every zone is isolated: any pipeline error raised while processing it is
turned into a diagnostic and the batch carries on with the next zone.
Documents are independent and can be fanned out across worker threads;
output order always follows input order, and vertex order within a zone
is never changed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fishban_zones.activities.classify_geometry import classify_sequence
from fishban_zones.activities.extract_rows import split_text_blocks
from fishban_zones.activities.parse_coordinates import parse_points
from fishban_zones.activities.sanitize_polygon import sanitize_polygon
from fishban_zones.activities.segment_sequence import segment_sequence
from fishban_zones.core.config import ParserConfig
from fishban_zones.core.exceptions import FishbanError
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.models.feature import (
    Feature,
    FeatureCollection,
    FeatureProperties,
    GeometryType,
)
from fishban_zones.models.geo import PointSequence

if TYPE_CHECKING:
    from fishban_zones.models.catalog import Document

logger = logging.getLogger("fishban_zones.orchestrators.zone_pipeline")

# Presence of a degree sign means the text was meant to hold coordinates.
_DEGREE_SIGN = "°"


# ---------------------------------------------------------------------------
# Result contracts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ZoneResult:
    """Output of one zone."""

    features: list[Feature] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    sequence: PointSequence | None = None


@dataclass(frozen=True, slots=True)
class DocumentResult:
    """Output of one document, zones in row order."""

    document_id: str
    zones: list[ZoneResult] = field(default_factory=list)

    @property
    def features(self) -> list[Feature]:
        return [f for zone in self.zones for f in zone.features]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for zone in self.zones for d in zone.diagnostics]


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Output of a batch: the collection for the map plus all diagnostics."""

    collection: FeatureCollection = field(default_factory=FeatureCollection)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    documents: list[DocumentResult] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Zone
# ---------------------------------------------------------------------------


def process_zone(
    text: str,
    *,
    name: str = "",
    region_id: str = "",
    document_id: str = "",
    row_index: int | None = None,
    config: ParserConfig | None = None,
) -> ZoneResult:
    """Run the full pipeline over the coordinate text of one zone.

    Args:
        text: Text holding the zone's coordinate list.
        name: Zone label.
        region_id: Identifier of the owning region.
        document_id: Identifier of the owning document.
        row_index: Row of the zone within its document.
        config: Parser configuration.

    Returns:
        A ``ZoneResult``. Never raises for pipeline errors.
    """
    config = config or ParserConfig()
    try:
        return _process_zone(
            text,
            name=name,
            region_id=region_id,
            document_id=document_id,
            row_index=row_index,
            config=config,
        )
    except FishbanError as exc:
        logger.warning(
            "Zone '%s' in %s failed at stage %s: %s",
            name,
            document_id,
            exc.stage,
            exc,
        )
        return ZoneResult(
            diagnostics=[
                Diagnostic(
                    kind=_kind_for(exc),
                    message=exc.message,
                    text=exc.text,
                    zone=name,
                    document=document_id,
                    details=exc.to_error_dict(),
                )
            ]
        )


def _process_zone(
    text: str,
    *,
    name: str,
    region_id: str,
    document_id: str,
    row_index: int | None,
    config: ParserConfig,
) -> ZoneResult:
    parsed = parse_points(text, name=name, config=config, document=document_id)
    diagnostics = list(parsed.diagnostics)
    sequence = parsed.sequence

    if not len(sequence):
        if _DEGREE_SIGN in (text or ""):
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.EMPTY_POINT_LIST,
                    message="Text contains degree signs but no usable coordinate pairs",
                    text=(text or "")[:200],
                    zone=name,
                    document=document_id,
                )
            )
        return ZoneResult(diagnostics=diagnostics, sequence=sequence)

    runs = [sequence]
    if config.split_on_distance:
        segmented = segment_sequence(
            sequence, max_segment_km=config.max_segment_km, document=document_id
        )
        runs = segmented.runs
        diagnostics.extend(segmented.diagnostics)

    features: list[Feature] = []
    for segment, run in enumerate(runs):
        feature = classify_sequence(
            run,
            properties=FeatureProperties(
                name=name,
                original=run.originals,
                region_id=region_id,
                document_id=document_id,
                row_index=row_index,
                segment=segment,
            ),
        )
        if feature is None:
            continue

        if config.repair_polygons and feature.geometry_type is GeometryType.POLYGON:
            sanitized = sanitize_polygon(feature, config=config)
            features.extend(sanitized.features)
            diagnostics.extend(sanitized.diagnostics)
        else:
            features.append(feature)

    return ZoneResult(features=features, diagnostics=diagnostics, sequence=sequence)


def _kind_for(exc: FishbanError) -> DiagnosticKind:
    if exc.stage == "sanitize_polygon":
        return DiagnosticKind.POLYGON_REPAIR_FAILURE
    return DiagnosticKind.MALFORMED_COORDINATE


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


def process_document(
    document: Document,
    *,
    config: ParserConfig | None = None,
) -> DocumentResult:
    """Run ``process_zone`` for every row of a document."""
    config = config or ParserConfig()
    zones = [
        process_zone(
            row.coordinates_text,
            name=row.header,
            region_id=document.region_id,
            document_id=document.document_id,
            row_index=row.row_index,
            config=config,
        )
        for row in document.rows
    ]
    result = DocumentResult(document_id=document.document_id, zones=zones)
    logger.info(
        "Document processed | document=%s | rows=%d | features=%d | diagnostics=%d",
        document.document_id,
        len(document.rows),
        len(result.features),
        len(result.diagnostics),
    )
    return result


def process_documents(
    documents: list[Document],
    *,
    config: ParserConfig | None = None,
    max_workers: int = 1,
) -> BatchResult:
    """Process many documents into one ``FeatureCollection``.

    Args:
        documents: Documents to process.
        config: Parser configuration shared (read-only) by all workers.
        max_workers: Thread count; ``1`` processes sequentially.

    Returns:
        A ``BatchResult`` with features in document, then row, order.
    """
    config = config or ParserConfig()
    if max_workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(lambda doc: process_document(doc, config=config), documents))
    else:
        results = [process_document(doc, config=config) for doc in documents]

    features = tuple(f for result in results for f in result.features)
    diagnostics = [d for result in results for d in result.diagnostics]
    logger.info(
        "Batch processed | documents=%d | features=%d | diagnostics=%d",
        len(documents),
        len(features),
        len(diagnostics),
    )
    return BatchResult(
        collection=FeatureCollection(features=features),
        diagnostics=diagnostics,
        documents=results,
    )


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


def process_text(
    text: str,
    *,
    name: str = "",
    region_id: str = "",
    document_id: str = "",
    config: ParserConfig | None = None,
) -> BatchResult:
    """Process free text that may hold several named coordinate blocks.

    Text with numbered coordinate lines is split into blocks first; text
    without them (e.g. one table cell pasted as a paragraph) is treated
    as a single zone named ``name``.
    """
    config = config or ParserConfig()
    split = split_text_blocks(text, document=document_id)
    diagnostics = list(split.diagnostics)

    blocks = [(block.name or name, block.text) for block in split.blocks]
    if not blocks:
        blocks = [(name, text)]

    zones = [
        process_zone(
            block_text,
            name=block_name,
            region_id=region_id,
            document_id=document_id,
            row_index=row_index,
            config=config,
        )
        for row_index, (block_name, block_text) in enumerate(blocks)
    ]
    for zone in zones:
        diagnostics.extend(zone.diagnostics)

    return BatchResult(
        collection=FeatureCollection(features=tuple(f for z in zones for f in z.features)),
        diagnostics=diagnostics,
        documents=[DocumentResult(document_id=document_id, zones=zones)],
    )
