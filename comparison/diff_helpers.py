"""Small helpers shared by the differs: anchors, context windows, previews."""
from __future__ import annotations

from typing import Tuple

from comparison.models import DocumentPosition, DocumentStructure


def line_anchor(doc: DocumentStructure, line_index: int) -> DocumentPosition:
    """
    Position where a change lands in ``doc`` given a 0-based line counter.

    Resolves to the start of that line, or to the end of the text once the
    counter has run past the last line.
    """
    index = doc.position_index
    if line_index < index.line_count:
        return index.line_start_position(line_index + 1)
    return index.end_position


def offset_anchor(doc: DocumentStructure, offset: int) -> DocumentPosition:
    """Position at ``offset``, or the end of the text if the offset lies beyond it."""
    index = doc.position_index
    if offset in index:
        return index.position_at(offset)
    return index.end_position


def context_window(text: str, start: int, end: int, chars: int) -> Tuple[str, str]:
    """Up to ``chars`` characters immediately before ``start`` and after ``end``."""
    if chars <= 0:
        return "", ""
    return text[max(0, start - chars):start], text[end:end + chars]


def preview(text: str, limit: int) -> str:
    """Quote at most ``limit`` characters of ``text``, with an ellipsis when cut."""
    snippet = text[:limit]
    return f"{snippet}..." if len(text) > limit else snippet
