from __future__ import annotations

from dataclasses import replace

import pytest

from comparison.document_builder import build_document
from comparison.errors import InvalidDocumentError
from utils.validation import validate_document, validate_document_pair


@pytest.fixture
def doc():
    return build_document(["ab\ncd", "ef"])


def _with_first_page(doc, **changes):
    return replace(doc, pages=(replace(doc.pages[0], **changes),) + doc.pages[1:])


def test_valid_documents_pass(doc):
    assert validate_document(doc) is doc
    assert validate_document(build_document([])) is not None
    assert validate_document_pair(doc, doc) == (doc, doc)


def test_missing_document():
    with pytest.raises(InvalidDocumentError, match="left document is missing"):
        validate_document(None, "left")


def test_wrong_type():
    with pytest.raises(InvalidDocumentError, match="got str"):
        validate_document("plain text", "left")


def test_pair_names_the_failing_side(doc):
    with pytest.raises(InvalidDocumentError, match="right"):
        validate_document_pair(doc, None)


def test_invalid_document_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_document(None)


def test_missing_position_index(doc):
    with pytest.raises(InvalidDocumentError, match="no position index"):
        validate_document(replace(doc, position_index=None))


def test_page_render_offset_mismatch(doc):
    with pytest.raises(InvalidDocumentError, match="starts at offset 5, expected 0"):
        validate_document(_with_first_page(doc, render_offset=5))


def test_page_without_lines(doc):
    with pytest.raises(InvalidDocumentError, match="has no lines"):
        validate_document(_with_first_page(doc, lines=()))


def test_lines_must_reproduce_content(doc):
    with pytest.raises(InvalidDocumentError, match="do not reproduce"):
        validate_document(_with_first_page(doc, content="ab\nXX"))


def test_line_numbering(doc):
    lines = doc.pages[0].lines
    renumbered = (replace(lines[0], line_number=2),) + lines[1:]

    with pytest.raises(InvalidDocumentError, match="where line 1 was expected"):
        validate_document(_with_first_page(doc, lines=renumbered))


def test_line_offsets_must_be_contiguous(doc):
    lines = doc.pages[0].lines
    shifted = (lines[0], replace(lines[1], start_offset=4, end_offset=6))

    with pytest.raises(InvalidDocumentError, match="starts at 4, expected 3"):
        validate_document(_with_first_page(doc, lines=shifted))


def test_index_must_cover_document_lines(doc):
    other_index = build_document(["single"]).position_index

    with pytest.raises(InvalidDocumentError, match="position index holds 1 lines"):
        validate_document(replace(doc, position_index=other_index))
