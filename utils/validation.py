"""Input validation helpers."""
from __future__ import annotations

from typing import Tuple

from comparison.errors import InvalidDocumentError
from comparison.models import PAGE_SEPARATOR, DocumentStructure
from comparison.position_index import PositionIndex


def validate_document(doc: object, side: str = "document") -> DocumentStructure:
    """
    Reject missing or inconsistent documents before any differ runs.

    Checks that pages are contiguous in offset space, every page has lines
    that reproduce its content, lines are numbered from 1 and contiguous
    within their page, and the position index covers the same lines.

    Raises:
        InvalidDocumentError: describing the first problem found
    """
    if doc is None:
        raise InvalidDocumentError(f"The {side} document is missing")
    if not isinstance(doc, DocumentStructure):
        raise InvalidDocumentError(
            f"The {side} document must be a DocumentStructure, got {type(doc).__name__}"
        )
    if not isinstance(doc.position_index, PositionIndex):
        raise InvalidDocumentError(f"The {side} document has no position index")

    expected_offset = 0
    for page in doc.pages:
        if page.render_offset != expected_offset:
            raise InvalidDocumentError(
                f"{side}: page {page.page_number} starts at offset {page.render_offset}, "
                f"expected {expected_offset}"
            )
        if not page.lines:
            raise InvalidDocumentError(f"{side}: page {page.page_number} has no lines")
        if "\n".join(line.content for line in page.lines) != page.content:
            raise InvalidDocumentError(
                f"{side}: lines of page {page.page_number} do not reproduce its content"
            )
        line_offset = page.render_offset
        for number, line in enumerate(page.lines, start=1):
            if line.line_number != number or line.page_number != page.page_number:
                raise InvalidDocumentError(
                    f"{side}: page {page.page_number} has line {line.line_number} "
                    f"(page {line.page_number}) where line {number} was expected"
                )
            if line.start_offset != line_offset:
                raise InvalidDocumentError(
                    f"{side}: line {number} on page {page.page_number} starts at "
                    f"{line.start_offset}, expected {line_offset}"
                )
            line_offset = line.end_offset + 1
        expected_offset = page.render_offset + len(page.content) + len(PAGE_SEPARATOR)

    if doc.position_index.line_count != doc.line_count:
        raise InvalidDocumentError(
            f"{side}: position index holds {doc.position_index.line_count} lines, "
            f"document has {doc.line_count}"
        )
    return doc


def validate_document_pair(left: object, right: object) -> Tuple[DocumentStructure, DocumentStructure]:
    return validate_document(left, "left"), validate_document(right, "right")
