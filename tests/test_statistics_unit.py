from __future__ import annotations

import pytest

from comparison.document_builder import build_document
from comparison.models import DOCUMENT_START, ComparisonStatistics, DocumentPosition, PreciseDifference
from comparison.statistics import (
    average_confidence,
    calculate_statistics,
    generate_summary,
    overall_similarity,
    select_major_changes,
)
from config.settings import settings


def _d(
    diff_id: str,
    *,
    diff_type: str = "deletion",
    category: str = "text",
    severity: str = "low",
    left: str = "",
    right: str = "",
    page: int = 1,
    line: int = 1,
    conf: float = 0.8,
) -> PreciseDifference:
    return PreciseDifference(
        id=diff_id,
        diff_type=diff_type,  # type: ignore[arg-type]
        severity=severity,  # type: ignore[arg-type]
        category=category,  # type: ignore[arg-type]
        description=f"desc {diff_id}",
        left_content=left,
        right_content=right,
        left_position=DocumentPosition(page=page, line=line, column=1, offset=0, absolute_offset=0),
        right_position=DOCUMENT_START,
        confidence=conf,
    )


def test_overall_similarity_approximation():
    left = build_document(["x" * 100])
    right = build_document(["y" * 80])

    diffs = [_d("a", left="z" * 10), _d("b", right="w" * 5)]

    assert overall_similarity(diffs, left, right) == pytest.approx(0.85)


def test_overall_similarity_is_clamped_and_empty_documents_are_identical():
    left = build_document(["x" * 10])
    right = build_document(["y" * 10])

    assert overall_similarity([_d("a", left="z" * 200)], left, right) == 0.0
    assert overall_similarity([], build_document([]), build_document([])) == 1.0
    assert overall_similarity([], left, right) == 1.0


def test_average_confidence():
    assert average_confidence([]) == 0.0
    assert average_confidence([_d("a", conf=0.9), _d("b", conf=0.7)]) == pytest.approx(0.8)


def test_calculate_statistics_counts():
    diffs = [
        _d("add", diff_type="addition", right="new", page=1),
        _d("del", diff_type="deletion", severity="critical", left="old", page=2),
        _d("struct", diff_type="structure", category="structure", severity="high", left="2 pages", right="3 pages"),
        _d("fmt", diff_type="format", category="format", left="A", right="a"),
    ]
    doc = build_document(["some text of reasonable length here"])

    stats = calculate_statistics(diffs, doc, doc)

    assert stats.total_differences == 4
    assert (stats.additions, stats.deletions, stats.modifications) == (1, 1, 0)
    assert (stats.text_changes, stats.format_changes, stats.structure_changes, stats.metadata_changes) == (2, 1, 1, 0)
    assert (stats.critical, stats.high, stats.medium, stats.low) == (1, 1, 0, 2)
    assert stats.page_distribution == {1: 3, 2: 1}
    assert stats.critical + stats.high + stats.medium + stats.low == stats.total_differences
    assert sum(stats.page_distribution.values()) == stats.total_differences
    assert stats.average_confidence == pytest.approx(0.8)
    assert 0.0 <= stats.overall_similarity <= 1.0


def test_select_major_changes_orders_critical_first():
    diffs = [
        _d("A", severity="high"),
        _d("B", severity="critical"),
        _d("C", severity="medium"),
        _d("D", severity="high"),
        _d("E", severity="critical"),
    ]

    assert [d.id for d in select_major_changes(diffs)] == ["B", "E", "A", "D"]
    assert [d.id for d in select_major_changes(diffs, limit=2)] == ["B", "E"]


def test_select_major_changes_default_limit(monkeypatch):
    monkeypatch.setattr(settings, "summary_major_changes_limit", 3)
    diffs = [_d(str(i), severity="high") for i in range(10)]

    assert len(select_major_changes(diffs)) == 3


def test_generate_summary_lists_and_recommendations():
    diffs = [
        _d("struct", diff_type="structure", category="structure", severity="high"),
        _d("fmt", diff_type="format", category="format"),
        _d("crit", severity="critical"),
    ]
    stats = ComparisonStatistics(structure_changes=1, critical=1, overall_similarity=0.2)

    summary = generate_summary(diffs, stats)

    assert summary.major_changes == ("desc crit", "desc struct")
    assert summary.structural_changes == ("desc struct",)
    assert summary.format_changes == ("desc fmt",)
    assert len(summary.recommendations) == 3
    assert summary.recommendations[0].startswith("Documents differ substantially")


def test_generate_summary_without_findings():
    summary = generate_summary([], ComparisonStatistics())

    assert summary.major_changes == ()
    assert summary.recommendations == ()
