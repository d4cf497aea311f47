from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from comparison.document_builder import build_document
from comparison.models import (
    DOCUMENT_START,
    ComparisonResult,
    ComparisonStatistics,
    ComparisonSummary,
    DocumentPosition,
    PreciseDifference,
)


def _diff(diff_id: str, page: int, left: str = "a", right: str = "") -> PreciseDifference:
    position = DocumentPosition(page=page, line=1, column=1, offset=0, absolute_offset=0)
    return PreciseDifference(
        id=diff_id,
        diff_type="deletion",
        severity="low",
        category="text",
        description="d",
        left_content=left,
        right_content=right,
        left_position=position,
        right_position=DOCUMENT_START,
    )


def test_document_counts_and_full_text():
    doc = build_document(["one\ntwo", "three"])

    assert doc.page_count == 2
    assert doc.line_count == 3
    assert doc.character_count == len("one\ntwo") + len("three")
    assert doc.full_text == "one\ntwo\nthree"
    # Page separators are part of the full text but not of the character count.
    assert len(doc.full_text) == doc.character_count + doc.page_count - 1


def test_line_length_and_position_key():
    doc = build_document(["hello"])
    line = doc.pages[0].lines[0]

    assert line.length == 5
    assert doc.position_index.position_at(4).key == (1, 1, 5)


def test_models_are_immutable():
    doc = build_document(["x"])
    with pytest.raises(FrozenInstanceError):
        doc.name = "other"  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        DOCUMENT_START.line = 2  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        _diff("d", 1).severity = "high"  # type: ignore[misc]


def test_changed_length_uses_larger_side():
    assert _diff("d", 1, left="abc", right="").changed_length == 3
    assert _diff("d", 1, left="ab", right="wxyz").changed_length == 4


def test_statistics_and_summary_to_dict():
    stats = ComparisonStatistics(total_differences=2, additions=1, deletions=1, page_distribution={1: 2})

    as_dict = stats.to_dict()
    assert as_dict["total_differences"] == 2
    assert as_dict["page_distribution"] == {1: 2}
    assert as_dict["overall_similarity"] == 1.0

    summary = ComparisonSummary(major_changes=["x"])
    assert summary.major_changes == ("x",)
    assert summary.to_dict() == {
        "major_changes": ["x"],
        "structural_changes": [],
        "format_changes": [],
        "recommendations": [],
    }


def test_differences_on_page_keeps_result_order():
    diffs = (_diff("a", 1), _diff("b", 2), _diff("c", 1))
    result = ComparisonResult(
        differences=diffs,
        statistics=ComparisonStatistics(),
        summary=ComparisonSummary(),
    )

    assert [d.id for d in result.differences_on_page(1)] == ["a", "c"]
    assert result.differences_on_page(3) == ()


def test_result_parts_cannot_be_changed():
    source = {1: 2}
    stats = ComparisonStatistics(total_differences=2, page_distribution=source)
    summary = ComparisonSummary(recommendations=["review"])
    result = ComparisonResult(differences=(), statistics=stats, summary=summary)

    with pytest.raises(FrozenInstanceError):
        result.statistics.total_differences = 0  # type: ignore[misc]
    with pytest.raises(TypeError):
        result.statistics.page_distribution[1] = 5  # type: ignore[index]
    with pytest.raises(FrozenInstanceError):
        result.summary.recommendations = ()  # type: ignore[misc]
    with pytest.raises(AttributeError):
        result.summary.recommendations.append("more")  # type: ignore[attr-defined]

    # The caller's dict is copied, not wrapped.
    source[1] = 99
    assert stats.page_distribution == {1: 2}
