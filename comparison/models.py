"""Shared data models for document structure and comparison output."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from functools import cached_property
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Literal, Mapping, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from comparison.position_index import PositionIndex


PAGE_SEPARATOR = "\n"


@dataclass(frozen=True)
class DocumentPosition:
    page: int
    line: int
    column: int  # 1-based
    offset: int  # 0-based offset within the line
    absolute_offset: int

    @property
    def key(self) -> Tuple[int, int, int]:
        """(page, line, column) key used by the inverse index."""
        return (self.page, self.line, self.column)


DOCUMENT_START = DocumentPosition(page=1, line=1, column=1, offset=0, absolute_offset=0)


@dataclass(frozen=True)
class DocumentLine:
    line_number: int  # 1-based within its page
    content: str
    start_offset: int
    end_offset: int
    page_number: int

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset


@dataclass(frozen=True)
class DocumentPage:
    page_number: int
    content: str
    lines: Tuple[DocumentLine, ...] = ()
    render_offset: int = 0  # absolute offset of the page's first character
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class DocumentSection:
    title: str
    level: int
    start_position: DocumentPosition
    end_position: DocumentPosition
    content: str


@dataclass(frozen=True)
class DocumentMetadata:
    title: Optional[str] = None
    author: Optional[str] = None
    created_date: Optional[datetime] = None
    modified_date: Optional[datetime] = None
    language: Optional[str] = None
    encoding: Optional[str] = None


@dataclass(frozen=True)
class DocumentStructure:
    """
    A fully populated document as handed over by the extraction step.

    Never mutated after construction; the position index is built once by the
    builder and shared read-only by every differ.
    """
    pages: Tuple[DocumentPage, ...]
    position_index: "PositionIndex"
    sections: Tuple[DocumentSection, ...] = ()
    name: str = ""
    doc_type: str = "text/plain"
    size: int = 0
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def line_count(self) -> int:
        return sum(len(page.lines) for page in self.pages)

    @property
    def character_count(self) -> int:
        """Sum of page content lengths, page separators excluded."""
        return sum(len(page.content) for page in self.pages)

    @cached_property
    def full_text(self) -> str:
        """Whole-document text: page contents joined by a single newline."""
        return PAGE_SEPARATOR.join(page.content for page in self.pages)


DiffType = Literal["addition", "deletion", "modification", "format", "structure"]
Severity = Literal["low", "medium", "high", "critical"]
Category = Literal["text", "format", "structure", "metadata"]

SEVERITY_RANK: Dict[str, int] = {"low": 0, "medium": 1, "high": 2, "critical": 3}


@dataclass(frozen=True)
class PreciseDifference:
    id: str
    diff_type: DiffType
    severity: Severity
    category: Category
    description: str
    left_content: str
    right_content: str
    left_position: DocumentPosition
    right_position: DocumentPosition
    context_before: str = ""
    context_after: str = ""
    similarity: float = 0.0
    confidence: float = 0.0

    @property
    def changed_length(self) -> int:
        """Length of the larger side of the change."""
        return max(len(self.left_content), len(self.right_content))


@dataclass(frozen=True)
class ComparisonStatistics:
    total_differences: int = 0
    additions: int = 0
    deletions: int = 0
    modifications: int = 0
    text_changes: int = 0
    format_changes: int = 0
    structure_changes: int = 0
    metadata_changes: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    page_distribution: Mapping[int, int] = field(default_factory=dict)
    overall_similarity: float = 1.0
    average_confidence: float = 0.0

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "page_distribution", MappingProxyType(dict(self.page_distribution)))

    def to_dict(self) -> dict:
        """Convert statistics to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["page_distribution"] = dict(self.page_distribution)
        return data


@dataclass(frozen=True)
class ComparisonSummary:
    major_changes: Tuple[str, ...] = ()
    structural_changes: Tuple[str, ...] = ()
    format_changes: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, tuple(getattr(self, f.name)))

    def to_dict(self) -> Dict[str, list]:
        """Convert summary to dictionary."""
        return {f.name: list(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class ComparisonResult:
    differences: Tuple[PreciseDifference, ...]
    statistics: ComparisonStatistics
    summary: ComparisonSummary
    left_name: str = ""
    right_name: str = ""

    def differences_on_page(self, page: int) -> Tuple[PreciseDifference, ...]:
        """Differences whose left position falls on the given page, in result order."""
        return tuple(diff for diff in self.differences if diff.left_position.page == page)
