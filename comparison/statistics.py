"""Aggregate statistics and a rule-based summary over optimized differences."""
from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from comparison.models import (
    SEVERITY_RANK,
    ComparisonStatistics,
    ComparisonSummary,
    DocumentStructure,
    PreciseDifference,
)
from config.settings import settings
from utils.logging import logger

_TYPE_FIELDS = {
    "addition": "additions",
    "deletion": "deletions",
    "modification": "modifications",
}

_CATEGORY_FIELDS = {
    "text": "text_changes",
    "format": "format_changes",
    "structure": "structure_changes",
    "metadata": "metadata_changes",
}


def overall_similarity(
    differences: Sequence[PreciseDifference],
    left: DocumentStructure,
    right: DocumentStructure,
) -> float:
    """
    Approximate whole-document similarity.

    ``max(0, (max_chars - changed_chars) / max_chars)`` where ``changed_chars``
    sums the larger side of every difference. This is an approximation, not
    an edit-distance ratio over the whole documents: overlapping findings at
    different granularities are each counted. Two documents without any
    characters are identical (1.0).
    """
    total_chars = max(left.character_count, right.character_count)
    if total_chars == 0:
        return 1.0
    changed_chars = sum(diff.changed_length for diff in differences)
    return max(0.0, (total_chars - changed_chars) / total_chars)


def average_confidence(differences: Sequence[PreciseDifference]) -> float:
    """Arithmetic mean of difference confidences, 0 when there are none."""
    if not differences:
        return 0.0
    return sum(diff.confidence for diff in differences) / len(differences)


def calculate_statistics(
    differences: Sequence[PreciseDifference],
    left: DocumentStructure,
    right: DocumentStructure,
) -> ComparisonStatistics:
    """
    Reduce differences into counts, a per-page histogram and similarity scores.

    Format and structure differences do not fall into the addition/deletion/
    modification buckets, so those three counts may sum to less than the total.
    """
    counts: Counter = Counter()
    page_distribution: Dict[int, int] = {}
    for diff in differences:
        type_field = _TYPE_FIELDS.get(diff.diff_type)
        if type_field:
            counts[type_field] += 1
        category_field = _CATEGORY_FIELDS.get(diff.category)
        if category_field:
            counts[category_field] += 1
        counts[diff.severity] += 1

        page = diff.left_position.page
        page_distribution[page] = page_distribution.get(page, 0) + 1

    stats = ComparisonStatistics(
        total_differences=len(differences),
        page_distribution=page_distribution,
        overall_similarity=overall_similarity(differences, left, right),
        average_confidence=average_confidence(differences),
        **counts,
    )

    logger.debug(
        "Statistics: %d differences, similarity %.3f, confidence %.3f",
        stats.total_differences, stats.overall_similarity, stats.average_confidence,
    )
    return stats


def select_major_changes(
    differences: Sequence[PreciseDifference],
    limit: Optional[int] = None,
) -> List[PreciseDifference]:
    """Highest-severity differences (high or critical), critical first, then reading order."""
    limit = settings.summary_major_changes_limit if limit is None else limit
    candidates = [diff for diff in differences if SEVERITY_RANK[diff.severity] >= SEVERITY_RANK["high"]]
    candidates.sort(key=lambda diff: -SEVERITY_RANK[diff.severity])
    return candidates[:limit]


def generate_summary(
    differences: Sequence[PreciseDifference],
    statistics: ComparisonStatistics,
) -> ComparisonSummary:
    """Rule-based narrative summary."""
    recommendations: List[str] = []
    if statistics.overall_similarity < settings.low_similarity_threshold:
        recommendations.append(
            "Documents differ substantially; review all changes carefully"
        )
    if statistics.structure_changes > 0:
        recommendations.append(
            "Structural changes detected; confirm the document organization is as expected"
        )
    if statistics.critical > 0:
        recommendations.append(
            "Critical differences present; prioritize reviewing them"
        )

    return ComparisonSummary(
        major_changes=tuple(diff.description for diff in select_major_changes(differences)),
        structural_changes=tuple(diff.description for diff in differences if diff.category == "structure"),
        format_changes=tuple(diff.description for diff in differences if diff.category == "format"),
        recommendations=tuple(recommendations),
    )
