"""Shared pytest fixtures for the fishing-ban zone test suite."""

from __future__ import annotations

import pytest

from fishban_zones.core.config import ParserConfig
from fishban_zones.models.feature import FeatureProperties
from fishban_zones.models.geo import GeoPoint, PointSequence

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def dms_pair(lat: tuple[int, int, float], lon: tuple[int, int, float]) -> str:
    """Render one north/east point as it appears in regulation text."""
    return (
        f"{lat[0]}°{lat[1]}'{lat[2]:g}\" с.ш. "
        f"{lon[0]}°{lon[1]}'{lon[2]:g}\" в.д."
    )


def make_sequence(lon_lats: list[tuple[float, float]], name: str = "zone") -> PointSequence:
    """Build a ``PointSequence`` from ``(lon, lat)`` tuples."""
    return PointSequence(
        name=name,
        points=tuple(
            GeoPoint(index=i, lat=lat, lon=lon, original=f"p{i}")
            for i, (lon, lat) in enumerate(lon_lats, start=1)
        ),
    )


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> ParserConfig:
    """Default parser configuration."""
    return ParserConfig()


@pytest.fixture()
def properties() -> FeatureProperties:
    """Properties of a zone in a known document row."""
    return FeatureProperties(
        name="Устье реки",
        region_id="moskovskaya-oblast",
        document_id="moskovskaya-oblast/prikaz",
        row_index=2,
    )


# ---------------------------------------------------------------------------
# Coordinate text fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def numbered_two_points_text() -> str:
    """Two numbered points on one line."""
    return (
        "1. 55°30'0\" с.ш. 37°30'0\" в.д. "
        "2. 55°31'0\" с.ш. 37°31'0\" в.д."
    )


@pytest.fixture()
def triangle_text() -> str:
    """A small triangle near Moscow (~1 km edges)."""
    return "; ".join(
        [
            dms_pair((55, 0, 0), (37, 0, 0)),
            dms_pair((55, 0, 36), (37, 0, 0)),
            dms_pair((55, 0, 36), (37, 0, 36)),
        ]
    )


@pytest.fixture()
def two_disjoint_zones_text() -> str:
    """A triangle plus a pair ~500 km north, concatenated into one list."""
    return "; ".join(
        [
            dms_pair((55, 0, 0), (37, 0, 0)),
            dms_pair((55, 0, 36), (37, 0, 0)),
            dms_pair((55, 0, 36), (37, 0, 36)),
            dms_pair((59, 30, 0), (37, 0, 36)),
            dms_pair((59, 30, 36), (37, 0, 36)),
        ]
    )


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def document_html(triangle_text: str) -> str:
    """A converted regulation document with a header and a zone table."""
    return f"""
    <html><body>
      <p>Приказ о запретных для добычи (вылова) водных биоресурсов</p>
      <p>районах и сроках в период нереста</p>
      <table>
        <tr><td>Наименование</td><td>Координаты</td></tr>
        <tr>
          <td><p>Устье реки Оки</p></td>
          <td><p>{triangle_text}</p></td>
        </tr>
        <tr>
          <td>Переход</td>
          <td><p>1. 55°10'0" с.ш. 37°10'0" в.д.</p><p>2. 55°10'30" с.ш. 37°10'0" в.д.</p></td>
        </tr>
        <tr><td>Пустая строка</td><td>не определено</td></tr>
      </table>
    </body></html>
    """


@pytest.fixture()
def catalog_payload(document_html: str) -> dict[str, object]:
    """Region index payload with one region and one document."""
    return {
        "regions": [
            {
                "title": "Московская область (1)",
                "url": "https://example.org/regions/moscow",
                "documents": [
                    {
                        "title": "Приказ 12",
                        "url": "https://example.org/docs/12",
                        "content": document_html,
                    }
                ],
            }
        ]
    }


@pytest.fixture()
def sequence_factory():
    """Return ``make_sequence`` for tests that build sequences inline."""
    return make_sequence
