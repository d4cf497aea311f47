"""Heading/section detection strategies.

Detection is best-effort: the default heuristic both over- and
under-detects, and no differ relies on exhaustive heading coverage.
"""
from __future__ import annotations

import re
from typing import List, Optional, Protocol, Sequence, Tuple

from comparison.models import DocumentPage, DocumentPosition, DocumentSection


class SectionDetector(Protocol):
    """Strategy that finds heading sections on a single page."""

    def detect(self, page: DocumentPage) -> List[DocumentSection]:
        ...


_NUMBERED_RE = re.compile(r"^(\d+(?:\.\d+)*)(?:\.|\s|$)")


def heading_level(text: str) -> Optional[int]:
    """
    Return the heading level of a stripped line, or None if it is not a heading.

    A line is a heading if it is entirely upper-case (level 1) or starts with
    a dotted number prefix such as ``1.`` or ``2.3`` (level = number of
    numeric parts). A bare number without any dot ("2024 was ...") is not a
    heading.

    Examples:
        >>> heading_level("INTRODUCTION")
        1
        >>> heading_level("2.3 Scope")
        2
        >>> heading_level("Plain sentence.") is None
        True
    """
    if not text:
        return None
    match = _NUMBERED_RE.match(text)
    if match and "." in match.group(0):
        return len(match.group(1).split("."))
    if text.isupper():
        return 1
    return None


class HeadingSectionDetector:
    """Upper-case and numbered-prefix heading heuristic."""

    def __init__(self, max_title_length: int = 200):
        self.max_title_length = max_title_length

    def detect(self, page: DocumentPage) -> List[DocumentSection]:
        sections: List[DocumentSection] = []
        for line in page.lines:
            title = line.content.strip()
            if not title or len(title) > self.max_title_length:
                continue
            level = heading_level(title)
            if level is None:
                continue

            lead = len(line.content) - len(line.content.lstrip())
            end = lead + len(title)
            sections.append(DocumentSection(
                title=title,
                level=level,
                start_position=DocumentPosition(
                    page=page.page_number,
                    line=line.line_number,
                    column=lead + 1,
                    offset=lead,
                    absolute_offset=line.start_offset + lead,
                ),
                end_position=DocumentPosition(
                    page=page.page_number,
                    line=line.line_number,
                    column=end + 1,
                    offset=end,
                    absolute_offset=line.start_offset + end,
                ),
                content=title,
            ))
        return sections


def detect_sections(
    pages: Sequence[DocumentPage],
    detector: Optional[SectionDetector] = None,
) -> Tuple[DocumentSection, ...]:
    """Run a detector over every page, keeping document order."""
    detector = detector or HeadingSectionDetector()
    sections: List[DocumentSection] = []
    for page in pages:
        sections.extend(detector.detect(page))
    return tuple(sections)
