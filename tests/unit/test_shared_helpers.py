"""Tests for shared constants and helper functions.

Verifies that centralised constants and text helpers behave correctly
on the typographic variants found in converted documents.
"""

from __future__ import annotations

import unittest

from fishban_zones.core.constants import (
    DEFAULT_DEDUP_FUZZ_DEG,
    DEFAULT_MAX_SEGMENT_KM,
    DMS_LITERAL_RE,
    PAIR_GAP_RE,
)
from fishban_zones.utils.helpers import make_safe_identifier, normalize_text

# ---------------------------------------------------------------------------
# Tests: core.constants
# ---------------------------------------------------------------------------


class TestConstants(unittest.TestCase):
    """Verify centralised pipeline constants."""

    def test_defaults(self) -> None:
        assert DEFAULT_MAX_SEGMENT_KM == 100.0
        assert DEFAULT_DEDUP_FUZZ_DEG == 1e-7

    def test_literal_groups(self) -> None:
        match = DMS_LITERAL_RE.search("55°30'15,5\" с.ш.")
        assert match is not None
        assert match.group("degrees") == "55"
        assert match.group("minutes") == "30"
        assert match.group("seconds") == "15,5"
        assert match.group("marker") == "с.ш."

    def test_literal_skips_ordinal(self) -> None:
        match = DMS_LITERAL_RE.search("12. 55°30'15\" с.ш.")
        assert match is not None
        assert match.group(0) == "55°30'15\" с.ш."

    def test_latin_marker_not_word_prefix(self) -> None:
        """A word starting with N/S/E/W is not a marker."""
        assert DMS_LITERAL_RE.search("55°30'15\" Novgorod") is None

    def test_pair_gap(self) -> None:
        assert PAIR_GAP_RE.fullmatch(" , ; ")
        assert PAIR_GAP_RE.fullmatch("")
        assert not PAIR_GAP_RE.fullmatch(" и ")


# ---------------------------------------------------------------------------
# Tests: utils.helpers.normalize_text
# ---------------------------------------------------------------------------


class TestNormalizeText(unittest.TestCase):
    """Whitespace and typographic mark normalisation."""

    def test_collapses_whitespace(self) -> None:
        assert normalize_text("  a \n\t b  ") == "a b"

    def test_no_break_spaces(self) -> None:
        nbsp, narrow_nbsp = chr(0xA0), chr(0x202F)
        text = f"55°{nbsp}30'{narrow_nbsp}0\""
        assert normalize_text(text) == "55° 30' 0\""

    def test_primes_and_quotes(self) -> None:
        assert normalize_text("30′15″ 30’15” 30'15“") == "30'15\" 30'15\" 30'15\""

    def test_ordinal_as_degree(self) -> None:
        assert normalize_text("55º") == "55°"

    def test_empty(self) -> None:
        assert normalize_text("") == ""


# ---------------------------------------------------------------------------
# Tests: utils.helpers.make_safe_identifier
# ---------------------------------------------------------------------------


class TestMakeSafeIdentifier(unittest.TestCase):
    """Cyrillic → ASCII slug."""

    def test_region(self) -> None:
        assert make_safe_identifier("Московская область") == "moskovskaya-oblast"

    def test_punctuation_removed(self) -> None:
        assert make_safe_identifier("Республика Саха (Якутия)") == "respublika-saha-yakutiya"

    def test_latin_kept(self) -> None:
        assert make_safe_identifier("Order No 12") == "order-no-12"

    def test_dash_runs_collapsed(self) -> None:
        assert make_safe_identifier(" - Озеро -- Белое - ") == "ozero-beloe"
