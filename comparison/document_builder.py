"""Build fully populated DocumentStructure objects from extracted page texts."""
from __future__ import annotations

from typing import List, Optional, Sequence

from comparison.models import (
    PAGE_SEPARATOR,
    DocumentLine,
    DocumentMetadata,
    DocumentPage,
    DocumentStructure,
)
from comparison.position_index import PositionIndex
from comparison.sections import SectionDetector, detect_sections
from utils.logging import logger

FORM_FEED = "\f"


def build_lines(content: str, page_number: int, page_offset: int) -> List[DocumentLine]:
    """Split page content on newlines into contiguous lines starting at page_offset."""
    lines: List[DocumentLine] = []
    offset = page_offset
    for index, text in enumerate(content.split("\n"), start=1):
        lines.append(DocumentLine(
            line_number=index,
            content=text,
            start_offset=offset,
            end_offset=offset + len(text),
            page_number=page_number,
        ))
        offset += len(text) + 1  # newline
    return lines


def build_pages(page_texts: Sequence[str]) -> List[DocumentPage]:
    """Lay pages out contiguously, separated by a single page separator."""
    pages: List[DocumentPage] = []
    offset = 0
    for page_number, content in enumerate(page_texts, start=1):
        pages.append(DocumentPage(
            page_number=page_number,
            content=content,
            lines=tuple(build_lines(content, page_number, offset)),
            render_offset=offset,
        ))
        offset += len(content) + len(PAGE_SEPARATOR)
    return pages


def build_document(
    page_texts: Sequence[str],
    *,
    name: str = "",
    doc_type: str = "text/plain",
    metadata: Optional[DocumentMetadata] = None,
    section_detector: Optional[SectionDetector] = None,
) -> DocumentStructure:
    """
    Build a document from the text of each page.

    The text must already be extracted; this performs no file parsing. Lines
    are split on ``\\n``, the position index is built once, and sections are
    detected with ``section_detector`` (the heading heuristic by default).

    Args:
        page_texts: Text of each page, in order
        name: Display name of the document
        doc_type: MIME type reported by the extraction step
        metadata: Optional document metadata
        section_detector: Optional heading detection strategy

    Returns:
        Immutable DocumentStructure
    """
    pages = build_pages(page_texts)
    position_index = PositionIndex.build(pages)
    sections = detect_sections(pages, section_detector)
    size = sum(len(text.encode("utf-8")) for text in page_texts)

    logger.debug(
        "Built document %r: %d pages, %d lines, %d sections",
        name, len(pages), position_index.line_count, len(sections),
    )
    return DocumentStructure(
        pages=tuple(pages),
        position_index=position_index,
        sections=sections,
        name=name,
        doc_type=doc_type,
        size=size,
        metadata=metadata or DocumentMetadata(),
    )


def build_document_from_text(
    text: str,
    *,
    page_break: str = FORM_FEED,
    **kwargs,
) -> DocumentStructure:
    """Build a document from one string whose pages are separated by ``page_break``."""
    return build_document(text.split(page_break), **kwargs)
