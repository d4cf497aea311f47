"""Text tokenization and similarity helpers shared by the differs."""
from __future__ import annotations

import re
import unicodedata
from typing import List, Literal, Optional, Tuple

from rapidfuzz.distance import Levenshtein

FormatChange = Literal["whitespace", "case", "punctuation"]

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
_WORD_RE = re.compile(r"\S+")
_WHITESPACE_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"[^\w\s]", re.UNICODE)


def split_lines(text: str) -> List[str]:
    """
    Split text into line tokens on ``\\n``.

    Empty text has no lines; this keeps an empty document from producing a
    spurious empty-line token against a non-empty one.
    """
    if not text:
        return []
    return text.split("\n")


def split_paragraphs(text: str) -> List[Tuple[int, str]]:
    """
    Split text into paragraphs separated by blank lines.

    Returns:
        List of (start offset, paragraph text) tuples; whitespace-only
        paragraphs are dropped.
    """
    paragraphs: List[Tuple[int, str]] = []
    pos = 0
    for match in _PARAGRAPH_BREAK_RE.finditer(text):
        chunk = text[pos:match.start()]
        if chunk.strip():
            paragraphs.append((pos, chunk))
        pos = match.end()
    tail = text[pos:]
    if tail.strip():
        paragraphs.append((pos, tail))
    return paragraphs


def split_words(text: str) -> List[Tuple[int, int, str]]:
    """Whitespace-delimited words as (start, end, word) spans."""
    return [(m.start(), m.end(), m.group()) for m in _WORD_RE.finditer(text)]


def edit_distance(text_a: str, text_b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute costs, no transpositions."""
    return Levenshtein.distance(text_a, text_b)


def normalized_similarity(text_a: str, text_b: str) -> float:
    """
    Normalized Levenshtein similarity in [0, 1].

    ``(max_len - distance) / max_len``; two empty strings are identical.

    Examples:
        >>> normalized_similarity("", "")
        1.0
        >>> normalized_similarity("kitten", "sitting")
        0.5714285714285714
    """
    longest = max(len(text_a), len(text_b))
    if longest == 0:
        return 1.0
    return (longest - edit_distance(text_a, text_b)) / longest


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", unicodedata.normalize("NFC", text).strip())


def classify_format_change(text_a: str, text_b: str) -> Optional[FormatChange]:
    """
    Classify a change that leaves the words themselves intact.

    Checks run from the narrowest to the broadest normalization, so a
    whitespace-only change is never reported as a case change.

    Returns:
        "whitespace", "case" or "punctuation", or None if the texts are equal
        or differ in their character content.
    """
    if text_a == text_b:
        return None

    spaced_a = _collapse_whitespace(text_a)
    spaced_b = _collapse_whitespace(text_b)
    if spaced_a == spaced_b:
        return "whitespace"

    cased_a = spaced_a.casefold()
    cased_b = spaced_b.casefold()
    if cased_a == cased_b:
        return "case"

    bare_a = " ".join(_PUNCT_RE.sub("", cased_a).split())
    bare_b = " ".join(_PUNCT_RE.sub("", cased_b).split())
    if bare_a and bare_a == bare_b:
        return "punctuation"

    return None
