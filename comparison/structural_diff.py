"""Structural comparison: page counts and section headings."""
from __future__ import annotations

from typing import List, Optional, Sequence

from comparison.edit_script import compute_edit_script
from comparison.models import (
    DOCUMENT_START,
    DocumentPosition,
    DocumentSection,
    DocumentStructure,
    PreciseDifference,
)
from comparison.sections import SectionDetector, detect_sections
from config.settings import settings
from utils.logging import logger


def _pages_label(count: int) -> str:
    return f"{count} page" if count == 1 else f"{count} pages"


def detect_page_count_difference(
    left: DocumentStructure,
    right: DocumentStructure,
) -> Optional[PreciseDifference]:
    """One high-severity structure difference when the page counts differ."""
    if left.page_count == right.page_count:
        return None
    return PreciseDifference(
        id="struct-page-count",
        diff_type="structure",
        severity="high",
        category="structure",
        description=f"Page count changed: {left.page_count} → {right.page_count}",
        left_content=_pages_label(left.page_count),
        right_content=_pages_label(right.page_count),
        left_position=DOCUMENT_START,
        right_position=DOCUMENT_START,
        similarity=0.5,
        confidence=settings.page_count_confidence,
    )


def _sections(doc: DocumentStructure, detector: Optional[SectionDetector]) -> Sequence[DocumentSection]:
    if detector is None:
        return doc.sections
    return detect_sections(doc.pages, detector)


def _section_anchor(doc: DocumentStructure, sections: Sequence[DocumentSection], index: int) -> DocumentPosition:
    """Start of the section at ``index`` on the other side, or the end of that document."""
    if index < len(sections):
        return sections[index].start_position
    return doc.position_index.end_position


def detect_section_differences(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    detector: Optional[SectionDetector] = None,
    confidence: Optional[float] = None,
) -> List[PreciseDifference]:
    """
    Compare the ordered heading titles of both documents.

    Titles are treated as line tokens; every added or removed title becomes
    one medium-severity structure difference positioned at the heading.
    Without a ``detector`` the sections recorded on each document at intake
    are compared; with one, both documents are re-detected with it.
    """
    confidence = settings.section_confidence if confidence is None else confidence
    left_sections = _sections(left, detector)
    right_sections = _sections(right, detector)

    differences: List[PreciseDifference] = []
    script = compute_edit_script(
        [section.title for section in left_sections],
        [section.title for section in right_sections],
    )
    for segment in script:
        if segment.tag == "removed":
            other = _section_anchor(right, right_sections, segment.right_start)
            for section in left_sections[segment.left_start:segment.left_end]:
                differences.append(PreciseDifference(
                    id=f"struct-section-{len(differences)}",
                    diff_type="deletion",
                    severity="medium",
                    category="structure",
                    description=f"Section removed: {section.title}",
                    left_content=section.title,
                    right_content="",
                    left_position=section.start_position,
                    right_position=other,
                    confidence=confidence,
                ))
        elif segment.tag == "added":
            other = _section_anchor(left, left_sections, segment.left_start)
            for section in right_sections[segment.right_start:segment.right_end]:
                differences.append(PreciseDifference(
                    id=f"struct-section-{len(differences)}",
                    diff_type="addition",
                    severity="medium",
                    category="structure",
                    description=f"Section added: {section.title}",
                    left_content="",
                    right_content=section.title,
                    left_position=other,
                    right_position=section.start_position,
                    confidence=confidence,
                ))
    return differences


def detect_structural_differences(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    detector: Optional[SectionDetector] = None,
) -> List[PreciseDifference]:
    """
    Detect differences that are not expressible as text edits.

    Args:
        left: Original document
        right: Revised document
        detector: Heading detection strategy; None compares the sections
            found when the documents were built

    Returns:
        Page count difference (if any) followed by section differences
    """
    differences: List[PreciseDifference] = []
    page_difference = detect_page_count_difference(left, right)
    if page_difference is not None:
        differences.append(page_difference)
    differences.extend(detect_section_differences(left, right, detector=detector))

    logger.info("Detected %d structural differences", len(differences))
    return differences
