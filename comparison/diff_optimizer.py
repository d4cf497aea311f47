"""
Merge differ outputs into the final difference list.

Two steps, both deterministic:
1. Content-based deduplication: differences with the same
   (left_content, right_content) pair collapse to the first occurrence, so the
   same textual change found by several passes is reported once.
2. Stable sort by left position (page, line, column); ties keep insertion
   order, which "next/previous difference" navigation relies on.
"""
from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from comparison.models import PreciseDifference
from utils.logging import logger


def deduplicate_differences(differences: Iterable[PreciseDifference]) -> List[PreciseDifference]:
    """Drop later differences whose content pair was already seen."""
    seen: Set[Tuple[str, str]] = set()
    unique: List[PreciseDifference] = []
    for diff in differences:
        key = (diff.left_content, diff.right_content)
        if key in seen:
            continue
        seen.add(key)
        unique.append(diff)
    return unique


def reading_order_key(diff: PreciseDifference) -> Tuple[int, int, int]:
    position = diff.left_position
    return (position.page, position.line, position.column)


def optimize_differences(differences: Iterable[PreciseDifference]) -> List[PreciseDifference]:
    """
    Deduplicate and order differences.

    Args:
        differences: Concatenated output of all differs, in detector order

    Returns:
        Deduplicated differences in reading order
    """
    differences = list(differences)
    unique = deduplicate_differences(differences)
    ordered = sorted(unique, key=reading_order_key)
    logger.debug(
        "Optimized %d differences -> %d (%d duplicates dropped)",
        len(differences), len(ordered), len(differences) - len(unique),
    )
    return ordered
