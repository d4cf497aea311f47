from __future__ import annotations

from typing import List

import pytest

from comparison.document_builder import build_document, build_pages
from comparison.models import DocumentPage, DocumentPosition, DocumentSection
from comparison.sections import HeadingSectionDetector, detect_sections, heading_level


@pytest.mark.parametrize(
    "text, expected",
    [
        ("INTRODUCTION", 1),
        ("TERMS AND CONDITIONS", 1),
        ("1. Overview", 1),
        ("2.3 Scope", 2),
        ("4.1.7 Details", 3),
        ("3.", 1),
        ("2024 was a good year", None),
        ("Plain sentence.", None),
        ("", None),
        ("123", None),
    ],
)
def test_heading_level(text, expected):
    assert heading_level(text) == expected


def test_detector_positions_account_for_indentation():
    page = build_pages(["intro text\n   2.1 Indented Heading\nbody"])[0]

    sections = HeadingSectionDetector().detect(page)

    assert len(sections) == 1
    section = sections[0]
    assert section.title == "2.1 Indented Heading"
    assert section.level == 2
    assert section.start_position == DocumentPosition(page=1, line=2, column=4, offset=3, absolute_offset=14)
    assert section.end_position.column == 4 + len("2.1 Indented Heading")


def test_detector_skips_overlong_titles():
    page = build_pages(["A" * 30])[0]

    assert HeadingSectionDetector(max_title_length=20).detect(page) == []
    assert len(HeadingSectionDetector().detect(page)) == 1


class MarkdownDetector:
    """Treats lines starting with '#' as headings."""

    def detect(self, page: DocumentPage) -> List[DocumentSection]:
        sections = []
        for line in page.lines:
            if line.content.startswith("#"):
                level = len(line.content) - len(line.content.lstrip("#"))
                position = DocumentPosition(
                    page=page.page_number,
                    line=line.line_number,
                    column=1,
                    offset=0,
                    absolute_offset=line.start_offset,
                )
                sections.append(DocumentSection(
                    title=line.content.lstrip("# "),
                    level=level,
                    start_position=position,
                    end_position=position,
                    content=line.content,
                ))
        return sections


def test_detection_strategy_is_pluggable():
    pages = build_pages(["# Title\nTEXT\n## Sub", "# Next"])

    sections = detect_sections(pages, MarkdownDetector())

    assert [(s.title, s.level, s.start_position.page) for s in sections] == [
        ("Title", 1, 1),
        ("Sub", 2, 1),
        ("Next", 1, 2),
    ]


def test_builder_uses_given_detector():
    doc = build_document(["# Title\nSECTION"], section_detector=MarkdownDetector())

    assert [s.title for s in doc.sections] == ["Title"]
