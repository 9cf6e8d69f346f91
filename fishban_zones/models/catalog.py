"""Region / document catalog models.

A region page lists regulation documents; each document carries a table
whose rows describe zones. Documents reference their region by
``region_id`` and are resolved through a ``RegionTable`` rather than
holding the region object, so the catalog never forms an ownership cycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True)
class Region:
    """A region listed on the fishing-ban index page.

    Attributes:
        region_id: Transliterated identifier (see ``make_safe_identifier``).
        name: Region name with the trailing document count removed.
        title: Link title as shown on the index page.
        url: Region page URL.
    """

    region_id: str
    name: str
    title: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "region_id": self.region_id,
            "name": self.name,
            "title": self.title,
            "url": self.url,
        }


@dataclass(frozen=True, slots=True)
class TableRow:
    """One row of a document table: a zone label plus its coordinate cell.

    Attributes:
        header: Cell texts of the row joined by a single space.
        coordinates_text: Text of the cell holding the coordinate list.
        row_index: Zero-based position among the table's data rows.
    """

    header: str
    coordinates_text: str = ""
    row_index: int = 0


@dataclass(frozen=True, slots=True)
class Document:
    """A regulation document belonging to a region.

    Attributes:
        document_id: Transliterated identifier of the document title.
        title: Document link title.
        region_id: Identifier of the owning region.
        url: Source URL of the document.
        header: Text of the paragraphs preceding the zone table.
        rows: Zone rows extracted from the table.
    """

    document_id: str
    title: str
    region_id: str = ""
    url: str = ""
    header: str = ""
    rows: tuple[TableRow, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "document_id": self.document_id,
            "title": self.title,
            "region_id": self.region_id,
            "url": self.url,
            "header": self.header,
            "rows": [
                {
                    "header": r.header,
                    "coordinates_text": r.coordinates_text,
                    "row_index": r.row_index,
                }
                for r in self.rows
            ],
        }


@dataclass(slots=True)
class RegionTable:
    """Identifier lookup for regions."""

    _regions: dict[str, Region] = field(default_factory=dict)

    @classmethod
    def from_regions(cls, regions: list[Region]) -> RegionTable:
        table = cls()
        for region in regions:
            table.add(region)
        return table

    def add(self, region: Region) -> None:
        """Register a region.

        Raises:
            ValueError: If a different region is already registered under
                the same identifier.
        """
        existing = self._regions.get(region.region_id)
        if existing is not None and existing != region:
            msg = f"Duplicate region identifier: {region.region_id!r}"
            raise ValueError(msg)
        self._regions[region.region_id] = region

    def get(self, region_id: str) -> Region | None:
        return self._regions.get(region_id)

    def __contains__(self, region_id: object) -> bool:
        return region_id in self._regions

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions.values())
