from __future__ import annotations

from comparison.diff_optimizer import deduplicate_differences, optimize_differences, reading_order_key
from comparison.models import DOCUMENT_START, DocumentPosition, PreciseDifference


def _d(
    diff_id: str,
    *,
    left: str = "a",
    right: str = "",
    page: int = 1,
    line: int = 1,
    column: int = 1,
) -> PreciseDifference:
    return PreciseDifference(
        id=diff_id,
        diff_type="deletion",
        severity="low",
        category="text",
        description=diff_id,
        left_content=left,
        right_content=right,
        left_position=DocumentPosition(page=page, line=line, column=column, offset=column - 1, absolute_offset=0),
        right_position=DOCUMENT_START,
    )


def test_deduplicate_keeps_first_occurrence():
    diffs = [_d("line", left="C"), _d("word", left="C"), _d("other", left="C", right="D")]

    assert [d.id for d in deduplicate_differences(diffs)] == ["line", "other"]


def test_reading_order_key():
    assert reading_order_key(_d("x", page=2, line=3, column=4)) == (2, 3, 4)


def test_optimize_sorts_by_page_line_column():
    diffs = [
        _d("c", left="3", page=2, line=1),
        _d("b", left="2", page=1, line=2, column=5),
        _d("a", left="1", page=1, line=2, column=1),
    ]

    assert [d.id for d in optimize_differences(diffs)] == ["a", "b", "c"]


def test_ties_keep_insertion_order():
    diffs = [_d("first", left="x"), _d("second", left="y"), _d("third", left="z")]

    assert [d.id for d in optimize_differences(diffs)] == ["first", "second", "third"]


def test_optimize_is_idempotent():
    diffs = [_d("b", left="2", line=5), _d("a", left="1", line=1), _d("dup", left="2", line=9)]

    once = optimize_differences(diffs)

    assert optimize_differences(once) == once
    assert [d.id for d in once] == ["a", "b"]


def test_optimize_accepts_any_iterable():
    assert optimize_differences(iter([])) == []
