"""Word-level comparison within paragraphs."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from comparison.diff_helpers import context_window, offset_anchor, preview
from comparison.edit_script import compute_edit_script
from comparison.models import DocumentPosition, DocumentStructure, PreciseDifference, Severity
from config.settings import settings
from utils.logging import logger
from utils.text_diff import normalized_similarity, split_paragraphs, split_words

WordSpan = Tuple[int, int, str]


def detect_word_differences(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    confidence: Optional[float] = None,
    context_chars: Optional[int] = None,
) -> List[PreciseDifference]:
    """
    Compare paragraphs word by word.

    Paragraph ``i`` on the left is compared with paragraph ``i`` on the right;
    a missing counterpart is treated as empty. Alignment is positional only,
    so once paragraph counts diverge early, later paragraphs may be reported
    against unrelated counterparts.

    Args:
        left: Original document
        right: Revised document
        confidence: Confidence for each emitted difference (settings default)
        context_chars: Context window size (settings default)

    Returns:
        One PreciseDifference per added or removed run of words
    """
    left_paragraphs = split_paragraphs(left.full_text)
    right_paragraphs = split_paragraphs(right.full_text)
    logger.debug(
        "Word diff over %d vs %d paragraphs", len(left_paragraphs), len(right_paragraphs)
    )

    differences: List[PreciseDifference] = []
    for index in range(max(len(left_paragraphs), len(right_paragraphs))):
        left_start, left_text = (
            left_paragraphs[index] if index < len(left_paragraphs) else (None, "")
        )
        right_start, right_text = (
            right_paragraphs[index] if index < len(right_paragraphs) else (None, "")
        )
        differences.extend(detect_word_changes_in_segment(
            left,
            right,
            left_text,
            left_start,
            right_text,
            right_start,
            id_prefix=f"word-{index}",
            confidence=confidence,
            context_chars=context_chars,
        ))

    logger.info("Detected %d word-level differences", len(differences))
    return differences


def detect_word_changes_in_segment(
    left: DocumentStructure,
    right: DocumentStructure,
    left_text: str,
    left_start: Optional[int],
    right_text: str,
    right_start: Optional[int],
    *,
    id_prefix: str,
    confidence: Optional[float] = None,
    context_chars: Optional[int] = None,
) -> List[PreciseDifference]:
    """
    Word-level edit script between two aligned spans of text.

    ``left_start``/``right_start`` are the absolute offsets of the spans in
    their documents, or None when the span has no counterpart in that
    document. Equal spans produce nothing.
    """
    if left_text == right_text:
        return []

    confidence = settings.word_confidence if confidence is None else confidence
    context_chars = settings.word_context_chars if context_chars is None else context_chars
    similarity = normalized_similarity(left_text, right_text)

    left_words = split_words(left_text)
    right_words = split_words(right_text)
    script = compute_edit_script(
        [word for _, _, word in left_words],
        [word for _, _, word in right_words],
    )

    differences: List[PreciseDifference] = []
    for number, segment in enumerate(script):
        if segment.tag == "unchanged":
            continue

        if segment.tag == "removed":
            start, end = _run_span(left_words, segment.left_start, segment.left_end)
            content = left_text[start:end]
            absolute = left_start + start
            own = left.position_index.position_at(absolute)
            other = _word_anchor(right, right_text, right_start, right_words, segment.right_start)
            before, after = context_window(left.full_text, absolute, absolute + len(content), context_chars)
            differences.append(PreciseDifference(
                id=f"{id_prefix}-del-{number}",
                diff_type="deletion",
                severity=_word_severity(content),
                category="text",
                description=f"Words removed: '{preview(content, settings.description_preview_chars)}'",
                left_content=content,
                right_content="",
                left_position=own,
                right_position=other,
                context_before=before,
                context_after=after,
                similarity=similarity,
                confidence=confidence,
            ))
        else:
            start, end = _run_span(right_words, segment.right_start, segment.right_end)
            content = right_text[start:end]
            absolute = right_start + start
            own = right.position_index.position_at(absolute)
            other = _word_anchor(left, left_text, left_start, left_words, segment.left_start)
            before, after = context_window(right.full_text, absolute, absolute + len(content), context_chars)
            differences.append(PreciseDifference(
                id=f"{id_prefix}-add-{number}",
                diff_type="addition",
                severity=_word_severity(content),
                category="text",
                description=f"Words added: '{preview(content, settings.description_preview_chars)}'",
                left_content="",
                right_content=content,
                left_position=other,
                right_position=own,
                context_before=before,
                context_after=after,
                similarity=similarity,
                confidence=confidence,
            ))

    return differences


def _run_span(words: Sequence[WordSpan], first: int, last: int) -> Tuple[int, int]:
    """Character span from the start of word ``first`` to the end of word ``last - 1``."""
    return words[first][0], words[last - 1][1]


def _word_anchor(
    doc: DocumentStructure,
    text: str,
    text_start: Optional[int],
    words: Sequence[WordSpan],
    word_index: int,
) -> DocumentPosition:
    """Where a run from the other side lands in ``doc``: at the aligned word or the end of the span."""
    if text_start is None:
        return doc.position_index.end_position
    if word_index < len(words):
        return offset_anchor(doc, text_start + words[word_index][0])
    return offset_anchor(doc, text_start + len(text))


def _word_severity(content: str) -> Severity:
    return "medium" if len(content) > settings.word_medium_char_count else "low"
