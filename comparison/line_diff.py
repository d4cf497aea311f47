"""Line-level comparison and diff generation."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from comparison.diff_helpers import context_window, line_anchor, preview
from comparison.edit_script import compute_edit_script
from comparison.models import DocumentStructure, PreciseDifference, Severity
from comparison.word_diff import detect_word_changes_in_segment
from config.settings import settings
from utils.logging import logger
from utils.text_diff import split_lines


def calculate_severity(content: str) -> Severity:
    """
    Severity of an added/removed line segment from its size.

    Longer and more multi-line segments escalate from low to critical.
    """
    line_count = content.count("\n") + (0 if content.endswith("\n") else 1)
    length = len(content.strip())

    if line_count > settings.critical_line_count or length > settings.critical_char_count:
        return "critical"
    if line_count > settings.high_line_count or length > settings.high_char_count:
        return "high"
    if line_count > settings.medium_line_count or length > settings.medium_char_count:
        return "medium"
    return "low"


def segment_text(lines: Sequence[str], first: int, last: int, start_offset: int) -> Tuple[str, int]:
    """
    Text of the line run ``first:last`` including its line terminator.

    A run followed by more lines carries the newline that ends it. A run at
    the end of the text has no terminator of its own; when it holds only
    blank lines it takes the newline before it instead, so a blank line is
    never reported as empty content.

    Returns:
        (content, absolute offset where the content starts)
    """
    content = "\n".join(lines[first:last])
    if last < len(lines):
        return content + "\n", start_offset
    if first > 0 and not content.strip("\n"):
        return "\n" + content, start_offset - 1
    return content, start_offset


def detect_line_differences(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    confidence: Optional[float] = None,
    context_chars: Optional[int] = None,
) -> List[PreciseDifference]:
    """
    Compare the full text of two documents line by line.

    Emits one difference per contiguous added or removed run of lines; its
    content keeps the run's line terminator (see ``segment_text``). A
    replaced run yields a removal followed by an addition. Unchanged runs are
    handed to the word-level differ. Line counters on both sides advance in
    document order, so every position is an O(1) index lookup.

    Args:
        left: Original document
        right: Revised document
        confidence: Confidence for each emitted difference (settings default)
        context_chars: Context window size (settings default)

    Returns:
        List of PreciseDifference in edit-script order
    """
    confidence = settings.line_confidence if confidence is None else confidence
    context_chars = settings.line_context_chars if context_chars is None else context_chars

    left_text = left.full_text
    right_text = right.full_text
    left_lines = split_lines(left_text)
    right_lines = split_lines(right_text)
    logger.debug("Line diff over %d vs %d lines", len(left_lines), len(right_lines))

    differences: List[PreciseDifference] = []
    left_line = 0
    right_line = 0
    counter = 0

    for segment in compute_edit_script(left_lines, right_lines):
        if segment.tag == "unchanged":
            left_span = "\n".join(left_lines[segment.left_start:segment.left_end])
            right_span = "\n".join(right_lines[segment.right_start:segment.right_end])
            differences.extend(detect_word_changes_in_segment(
                left,
                right,
                left_span,
                line_anchor(left, left_line).absolute_offset,
                right_span,
                line_anchor(right, right_line).absolute_offset,
                id_prefix=f"line-eq-{counter}",
            ))
            left_line += segment.left_length
            right_line += segment.right_length
            continue

        if segment.tag == "removed":
            own = line_anchor(left, left_line)
            other = line_anchor(right, right_line)
            content, start = segment_text(left_lines, segment.left_start, segment.left_end, own.absolute_offset)
            quoted = preview(content.strip("\n"), settings.description_preview_chars)
            before, after = context_window(left_text, start, start + len(content), context_chars)
            differences.append(PreciseDifference(
                id=f"line-del-{counter}",
                diff_type="deletion",
                severity=calculate_severity(content),
                category="text",
                description=f"Text removed: '{quoted}'",
                left_content=content,
                right_content="",
                left_position=own,
                right_position=other,
                context_before=before,
                context_after=after,
                similarity=0.0,
                confidence=confidence,
            ))
            left_line += segment.left_length
        else:
            own = line_anchor(right, right_line)
            other = line_anchor(left, left_line)
            content, start = segment_text(right_lines, segment.right_start, segment.right_end, own.absolute_offset)
            quoted = preview(content.strip("\n"), settings.description_preview_chars)
            before, after = context_window(right_text, start, start + len(content), context_chars)
            differences.append(PreciseDifference(
                id=f"line-add-{counter}",
                diff_type="addition",
                severity=calculate_severity(content),
                category="text",
                description=f"Text added: '{quoted}'",
                left_content="",
                right_content=content,
                left_position=other,
                right_position=own,
                context_before=before,
                context_after=after,
                similarity=0.0,
                confidence=confidence,
            ))
            right_line += segment.right_length
        counter += 1

    logger.info("Detected %d line-level differences", len(differences))
    return differences
