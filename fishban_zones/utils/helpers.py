"""Shared text helpers used by the parsing and extraction stages."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9-]")
_DASH_RUN_RE = re.compile(r"-+")

# Typographic variants seen in converted DOCX bodies.
_PUNCTUATION_MAP = str.maketrans(
    {
        "\u00a0": " ",  # no-break space
        "\u202f": " ",  # narrow no-break space
        "′": "'",  # prime
        "’": "'",  # right single quotation mark
        "″": '"',  # double prime
        "”": '"',  # right double quotation mark
        "“": '"',  # left double quotation mark
        "º": "°",  # masculine ordinal, typed in place of a degree sign
    }
)

_TRANSLITERATION = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch", "ъ": "",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}  # fmt: skip


def normalize_text(text: str) -> str:
    """Collapse whitespace and map typographic marks to their ASCII forms.

    Args:
        text: Raw cell or paragraph text.

    Returns:
        The text with every whitespace run replaced by one space and
        leading/trailing whitespace removed.
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.translate(_PUNCTUATION_MAP)).strip()


def make_safe_identifier(name: str) -> str:
    """Transliterate a Cyrillic name into a lowercase ASCII slug.

    ``"Московская область"`` becomes ``"moskovskaya-oblast"``.
    """
    lowered = "".join(_TRANSLITERATION.get(ch, ch) for ch in name.strip().lower())
    slug = _NON_SLUG_RE.sub("", _WHITESPACE_RE.sub("-", lowered))
    return _DASH_RUN_RE.sub("-", slug).strip("-")
