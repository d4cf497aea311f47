"""Detect whitespace, case and punctuation-only line changes."""
from __future__ import annotations

from typing import Dict, List, Optional

from comparison.edit_script import compute_edit_script, replacement_pairs
from comparison.models import DocumentStructure, PreciseDifference
from config.settings import settings
from utils.logging import logger
from utils.text_diff import FormatChange, classify_format_change, normalized_similarity, split_lines

_DESCRIPTIONS: Dict[FormatChange, str] = {
    "whitespace": "Whitespace changed",
    "case": "Text case changed",
    "punctuation": "Punctuation changed",
}


def detect_format_differences(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    confidence: Optional[float] = None,
) -> List[PreciseDifference]:
    """
    Report replaced lines whose words are unchanged.

    Only replacements with the same number of lines on both sides are
    inspected; their lines are paired in order. A pair that differs only in
    whitespace, letter case or punctuation becomes one low-severity format
    difference. The line-level differ still reports the same replacement as
    a removal and an addition.
    """
    confidence = settings.format_confidence if confidence is None else confidence
    left_lines = split_lines(left.full_text)
    right_lines = split_lines(right.full_text)

    differences: List[PreciseDifference] = []
    script = compute_edit_script(left_lines, right_lines)
    for removed, added in replacement_pairs(script):
        if removed.left_length != added.right_length:
            continue
        for step in range(removed.left_length):
            left_index = removed.left_start + step
            right_index = added.right_start + step
            old_line = left_lines[left_index]
            new_line = right_lines[right_index]
            change = classify_format_change(old_line, new_line)
            if change is None:
                continue
            left_position = left.position_index.line_start_position(left_index + 1)
            differences.append(PreciseDifference(
                id=f"format-{len(differences)}",
                diff_type="format",
                severity="low",
                category="format",
                description=f"{_DESCRIPTIONS[change]} on page {left_position.page}, line {left_position.line}",
                left_content=old_line,
                right_content=new_line,
                left_position=left_position,
                right_position=right.position_index.line_start_position(right_index + 1),
                similarity=normalized_similarity(old_line, new_line),
                confidence=confidence,
            ))

    logger.info("Detected %d format differences", len(differences))
    return differences
