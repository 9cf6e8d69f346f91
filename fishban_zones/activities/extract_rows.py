"""Zone row extraction from converted documents.

Regulation documents arrive as HTML (converted from DOCX by an external
collaborator) whose first table lists one zone per row: a description
cell followed by a cell holding the coordinate list. Older documents are
plain text where a line starting with ``-`` names the next zone and
numbered lines carry the coordinates.

Responsibilities:
- HTML table → header + ``TableRow`` list (lxml)
- free text → named coordinate blocks
- region index payload → ``RegionTable`` + ``Document`` catalog
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from fishban_zones.core.constants import SPAWNING_KEYWORD
from fishban_zones.models.catalog import Document, Region, RegionTable, TableRow
from fishban_zones.models.diagnostics import Diagnostic, DiagnosticKind
from fishban_zones.utils.helpers import make_safe_identifier, normalize_text

if TYPE_CHECKING:
    from lxml.html import HtmlElement

logger = logging.getLogger("fishban_zones.activities.extract_rows")

# Block-level elements whose end separates text inside a table cell.
_BLOCK_TAGS = ("p", "br", "div", "li")

# A free-text coordinate line: "3. 55°..."
_COORDINATE_LINE_RE = re.compile(r"^\d+\.\s*\d+\s*°")

# Column-header lines repeated above every free-text list.
_SKIP_LINE_MARKERS = ("Наименование", "Место расположения")

# "Region name (12)" → "Region name"
_TITLE_COUNT_RE = re.compile(r"\s*\(\d+\)\s*$")


@dataclass(frozen=True, slots=True)
class ExtractedTable:
    """Header paragraphs and zone rows of one converted document."""

    header: str = ""
    rows: list[TableRow] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TextBlock:
    """One named coordinate block from free text."""

    name: str
    text: str


@dataclass(frozen=True, slots=True)
class TextBlocksResult:
    blocks: list[TextBlock] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Catalog:
    """Regions and their documents, linked by ``region_id``."""

    regions: RegionTable = field(default_factory=RegionTable)
    documents: list[Document] = field(default_factory=list)


# ---------------------------------------------------------------------------
# HTML tables
# ---------------------------------------------------------------------------


def extract_table_rows(html: str) -> ExtractedTable:
    """Extract the document header and zone rows from converted HTML.

    The header is the text of the ``<p>`` elements that precede a table.
    The first table with data rows is used; its first row holds column
    titles and is skipped. Each remaining row becomes a ``TableRow``
    whose ``header`` is all cell texts joined by a space and whose
    ``coordinates_text`` is the second cell.

    Returns:
        An ``ExtractedTable``; empty when the HTML has no table or no
        markup lxml can build a tree from (e.g. only a comment).
    """
    if not html or not html.strip():
        return ExtractedTable()

    from lxml import etree
    from lxml import html as lxml_html

    try:
        root = lxml_html.fromstring(html)
    except etree.ParserError as exc:
        logger.warning("Document content has no parsable markup: %s", exc)
        return ExtractedTable()

    header = " ".join(
        text
        for text in (
            normalize_text(p.text_content())
            for p in root.xpath("//p[following::table][not(ancestor::table)]")
        )
        if text
    )

    for table in root.xpath("//table"):
        rows = _table_rows(table)
        if rows:
            return ExtractedTable(header=header, rows=rows)

    logger.info("No zone table found in document (header=%r)", header[:80])
    return ExtractedTable(header=header)


def _table_rows(table: HtmlElement) -> list[TableRow]:
    rows: list[TableRow] = []
    for tr in table.xpath(".//tr")[1:]:
        cells = [_cell_text(td) for td in tr.xpath("./td")]
        if not cells:
            continue
        rows.append(
            TableRow(
                header=" ".join(cells),
                coordinates_text=cells[1] if len(cells) > 1 else "",
                row_index=len(rows),
            )
        )
    return rows


def _cell_text(cell: HtmlElement) -> str:
    """Cell text with a line break after every block-level child."""
    for element in cell.iter(*_BLOCK_TAGS):
        element.tail = "\n" + (element.tail or "")
    return normalize_text(cell.text_content())


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


def split_text_blocks(text: str, *, document: str = "") -> TextBlocksResult:
    """Split free text into named coordinate blocks.

    A run of consecutive numbered coordinate lines forms one block. The
    block is named by the most recent line that starts with a bare
    hyphen (``- Zone name:``). That hyphen rule is a lossy heuristic:
    it cannot tell a name from a hyphenated fragment, so every name it
    assigns is reported with a ``HYPHEN_NAME_HEURISTIC`` diagnostic, and
    a hyphen followed by a digit (a negative number) is never a name.
    Lines ending with ``:`` also name the next block, without a diagnostic.
    """
    blocks: list[TextBlock] = []
    diagnostics: list[Diagnostic] = []
    current_name = ""
    current_lines: list[str] = []

    def flush() -> None:
        if current_lines:
            blocks.append(TextBlock(name=current_name, text="\n".join(current_lines)))
            current_lines.clear()

    for raw_line in (text or "").splitlines():
        line = normalize_text(raw_line)
        if not line or any(marker in line for marker in _SKIP_LINE_MARKERS):
            continue

        if _COORDINATE_LINE_RE.match(line):
            current_lines.append(line)
            continue

        flush()

        if line.startswith("-") and not line[1:].lstrip()[:1].isdigit():
            current_name = line[1:].strip().removesuffix(":").strip()
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.HYPHEN_NAME_HEURISTIC,
                    message="Zone name taken from a line starting with a hyphen",
                    text=line,
                    zone=current_name,
                    document=document,
                )
            )
        elif line.endswith(":"):
            current_name = line.removesuffix(":").strip()

    flush()
    return TextBlocksResult(blocks=blocks, diagnostics=diagnostics)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def is_spawning_document(header: str) -> bool:
    """Whether a document header refers to the spawning-season ban."""
    return SPAWNING_KEYWORD in (header or "").lower()


def build_catalog(payload: dict[str, object]) -> Catalog:
    """Build the region table and documents from a region index payload.

    The payload has the shape ``{"regions": [{"title", "url", "region",
    "documents": [{"title", "url", "content"}]}]}`` where ``content`` is
    the converted HTML body of the document.

    Regions whose names slug to an identifier already taken by a different
    region get ``-2``, ``-3``, ... appended. A document whose content
    cannot be parsed is kept with no rows.

    Raises:
        TypeError: If ``regions`` or a region's ``documents`` is not a list.
    """
    regions_raw = payload.get("regions", [])
    if not isinstance(regions_raw, list):
        msg = f"regions must be a list, got {type(regions_raw).__name__}"
        raise TypeError(msg)

    table = RegionTable()
    documents: list[Document] = []

    for region_raw in regions_raw:
        title = str(region_raw.get("title", ""))
        name = str(region_raw.get("region", "") or _TITLE_COUNT_RE.sub("", title).strip())
        region = _unique_region(
            table,
            Region(
                region_id=make_safe_identifier(name),
                name=name,
                title=title,
                url=str(region_raw.get("url", "")),
            ),
        )
        table.add(region)

        documents_raw = region_raw.get("documents", []) or []
        if not isinstance(documents_raw, list):
            msg = f"documents must be a list, got {type(documents_raw).__name__}"
            raise TypeError(msg)

        for doc_raw in documents_raw:
            doc_title = str(doc_raw.get("title", ""))
            extracted = extract_table_rows(str(doc_raw.get("content", "") or ""))
            documents.append(
                Document(
                    document_id=f"{region.region_id}/{make_safe_identifier(doc_title)}",
                    title=doc_title,
                    region_id=region.region_id,
                    url=str(doc_raw.get("url", "")),
                    header=extracted.header,
                    rows=tuple(extracted.rows),
                )
            )

    logger.info(
        "Catalog built | regions=%d | documents=%d",
        len(table),
        len(documents),
    )
    return Catalog(regions=table, documents=documents)


def _unique_region(table: RegionTable, region: Region) -> Region:
    base = region.region_id
    suffix = 1
    candidate = region
    while True:
        existing = table.get(candidate.region_id)
        if existing is None or existing == candidate:
            break
        suffix += 1
        candidate = replace(region, region_id=f"{base}-{suffix}")

    if candidate.region_id != base:
        logger.warning(
            "Region identifier '%s' already taken, using '%s' for %r",
            base,
            candidate.region_id,
            region.title or region.name,
        )
    return candidate
