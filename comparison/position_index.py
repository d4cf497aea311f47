"""
Bidirectional offset <-> (page, line, column) index for one document.

The index is built in a single pass over the document's pages and lines.
Every character of every line is indexed, plus the line's end boundary
(the newline or page separator that follows it, or the end of the text).
The end boundary resolves to the end column of its own line, never to the
start of the next line.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from comparison.errors import InvalidDocumentError, PositionOutOfRangeError
from comparison.models import DOCUMENT_START, DocumentLine, DocumentPage, DocumentPosition


PositionKey = Tuple[int, int, int]  # (page, line, column)


class PositionIndex:
    """Read-only lookup tables derived from a document's pages."""

    def __init__(
        self,
        offset_to_position: Dict[int, DocumentPosition],
        position_to_offset: Dict[PositionKey, int],
        line_index: Dict[int, DocumentLine],
        page_line_index: Dict[Tuple[int, int], DocumentLine],
        page_index: Dict[int, DocumentPage],
    ):
        self._offset_to_position = offset_to_position
        self._position_to_offset = position_to_offset
        self._line_index = line_index
        self._page_line_index = page_line_index
        self._page_index = page_index
        self._max_offset = max(offset_to_position) if offset_to_position else -1

    @classmethod
    def build(cls, pages: Sequence[DocumentPage]) -> "PositionIndex":
        """
        Build the index from ordered pages.

        Raises:
            InvalidDocumentError: if page numbers are not strictly increasing,
                a line's offsets disagree with its content, or two lines claim
                the same offset.
        """
        offset_to_position: Dict[int, DocumentPosition] = {}
        position_to_offset: Dict[PositionKey, int] = {}
        line_index: Dict[int, DocumentLine] = {}
        page_line_index: Dict[Tuple[int, int], DocumentLine] = {}
        page_index: Dict[int, DocumentPage] = {}

        previous_page = 0
        ordinal = 0
        for page in pages:
            if page.page_number <= previous_page:
                raise InvalidDocumentError(
                    f"Page numbers must be strictly increasing, got {page.page_number} after {previous_page}"
                )
            previous_page = page.page_number
            page_index[page.page_number] = page

            for line in page.lines:
                if line.end_offset - line.start_offset != len(line.content):
                    raise InvalidDocumentError(
                        f"Line {line.line_number} on page {page.page_number} spans "
                        f"{line.start_offset}-{line.end_offset} but holds {len(line.content)} characters"
                    )
                ordinal += 1
                line_index[ordinal] = line
                page_line_index[(page.page_number, line.line_number)] = line

                for absolute in range(line.start_offset, line.end_offset + 1):
                    if absolute in offset_to_position:
                        raise InvalidDocumentError(f"Offset {absolute} is claimed by more than one line")
                    column_offset = absolute - line.start_offset
                    position = DocumentPosition(
                        page=page.page_number,
                        line=line.line_number,
                        column=column_offset + 1,
                        offset=column_offset,
                        absolute_offset=absolute,
                    )
                    offset_to_position[absolute] = position
                    position_to_offset[position.key] = absolute

        return cls(offset_to_position, position_to_offset, line_index, page_line_index, page_index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def position_at(self, offset: int) -> DocumentPosition:
        """Resolve an absolute offset to its position."""
        try:
            return self._offset_to_position[offset]
        except KeyError:
            raise PositionOutOfRangeError(
                f"Offset {offset} is outside the document range [0, {self._max_offset}]"
            ) from None

    def offset_at(self, position: DocumentPosition) -> int:
        """Resolve a position back to its absolute offset using (page, line, column)."""
        return self.offset_of(position.page, position.line, position.column)

    def offset_of(self, page: int, line: int, column: int) -> int:
        try:
            return self._position_to_offset[(page, line, column)]
        except KeyError:
            raise PositionOutOfRangeError(
                f"No position at page {page}, line {line}, column {column}"
            ) from None

    def line_at(self, line_number: int, page_number: Optional[int] = None) -> DocumentLine:
        """
        Look up a line.

        Without ``page_number`` the line number is the 1-based ordinal across
        the whole document; with it, the 1-based line number within that page.
        """
        if page_number is None:
            line = self._line_index.get(line_number)
        else:
            line = self._page_line_index.get((page_number, line_number))
        if line is None:
            where = f" on page {page_number}" if page_number is not None else ""
            raise PositionOutOfRangeError(f"No line {line_number}{where}")
        return line

    def page_at(self, page_number: int) -> DocumentPage:
        try:
            return self._page_index[page_number]
        except KeyError:
            raise PositionOutOfRangeError(f"No page {page_number}") from None

    def line_start_position(self, line_number: int) -> DocumentPosition:
        """Position of the first character of the document-wide line ordinal."""
        return self._offset_to_position[self.line_at(line_number).start_offset]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._line_index)

    @property
    def page_count(self) -> int:
        return len(self._page_index)

    @property
    def max_offset(self) -> int:
        """Largest indexed offset, -1 for a document without lines."""
        return self._max_offset

    @property
    def end_position(self) -> DocumentPosition:
        """Position of the end of the text, or the document start when there is none."""
        if self._max_offset < 0:
            return DOCUMENT_START
        return self._offset_to_position[self._max_offset]

    def offsets(self) -> List[int]:
        """All indexed offsets in ascending order."""
        return sorted(self._offset_to_position)

    def __contains__(self, offset: object) -> bool:
        return offset in self._offset_to_position

    def __len__(self) -> int:
        return len(self._offset_to_position)
