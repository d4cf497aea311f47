"""
Main orchestrator: compare two document structures.

Provides a single entrypoint that:
1. Validates both documents (indexes are already built at intake)
2. Runs the independent differs (line, word, structural, format)
3. Deduplicates and orders their findings
4. Aggregates statistics and a summary into one ComparisonResult

Either a full result is returned or an error is raised; nothing partial is
ever exposed to the caller.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from comparison.diff_optimizer import optimize_differences
from comparison.errors import DocumentComparisonError
from comparison.format_diff import detect_format_differences
from comparison.line_diff import detect_line_differences
from comparison.models import ComparisonResult, DocumentStructure, PreciseDifference
from comparison.sections import SectionDetector
from comparison.statistics import calculate_statistics, generate_summary
from comparison.structural_diff import detect_structural_differences
from comparison.word_diff import detect_word_differences
from config.settings import settings
from utils.logging import logger
from utils.performance import track_time
from utils.validation import validate_document_pair

Differ = Callable[[DocumentStructure, DocumentStructure], List[PreciseDifference]]


@dataclass
class PipelineConfig:
    """
    Configuration for the comparison pipeline; None falls back to settings.

    ``section_detector`` None compares the sections each document recorded
    when it was built; a detector re-detects both documents with it.
    """

    parallel: Optional[bool] = None
    num_workers: Optional[int] = None
    detect_format_changes: Optional[bool] = None
    section_detector: Optional[SectionDetector] = None

    def resolved_parallel(self) -> bool:
        return settings.parallel_differs if self.parallel is None else self.parallel

    def resolved_workers(self) -> int:
        return max(1, settings.num_workers if self.num_workers is None else self.num_workers)

    def resolved_format_changes(self) -> bool:
        if self.detect_format_changes is None:
            return settings.detect_format_changes
        return self.detect_format_changes


@dataclass
class PipelineMetrics:
    """Performance metrics from the last pipeline execution."""
    total_time: float = 0.0
    detection_time: float = 0.0
    optimization_time: float = 0.0
    aggregation_time: float = 0.0

    differ_counts: Dict[str, int] = field(default_factory=dict)
    diffs_before_optimization: int = 0
    diffs_after_optimization: int = 0

    @property
    def dedup_reduction_percent(self) -> float:
        if self.diffs_before_optimization == 0:
            return 0.0
        return (1 - self.diffs_after_optimization / self.diffs_before_optimization) * 100

    def to_dict(self) -> dict:
        return {
            "total_time": self.total_time,
            "detection_time": self.detection_time,
            "optimization_time": self.optimization_time,
            "aggregation_time": self.aggregation_time,
            "differ_counts": dict(self.differ_counts),
            "diffs_before_optimization": self.diffs_before_optimization,
            "diffs_after_optimization": self.diffs_after_optimization,
            "dedup_reduction_percent": self.dedup_reduction_percent,
        }


class ComparisonPipeline:
    """
    End-to-end document comparison pipeline.

    Usage:
        pipeline = ComparisonPipeline()
        result = pipeline.compare(left_doc, right_doc)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.metrics = PipelineMetrics()

    def differs(self) -> List[Tuple[str, Differ]]:
        """Differs in the fixed order their outputs are concatenated."""
        differs: List[Tuple[str, Differ]] = [
            ("line", detect_line_differences),
            ("word", detect_word_differences),
            ("structure", partial(detect_structural_differences, detector=self.config.section_detector)),
        ]
        if self.config.resolved_format_changes():
            differs.append(("format", detect_format_differences))
        return differs

    def compare(self, left: DocumentStructure, right: DocumentStructure) -> ComparisonResult:
        """
        Compare two documents.

        Args:
            left: Original document
            right: Revised document

        Returns:
            ComparisonResult with ordered, deduplicated differences,
            statistics and summary

        Raises:
            InvalidDocumentError: if either document is missing or inconsistent
        """
        start_time = time.perf_counter()
        self.metrics = PipelineMetrics()

        left, right = validate_document_pair(left, right)
        logger.info("=== Comparing %r (%d pages) with %r (%d pages) ===",
                    left.name, left.page_count, right.name, right.page_count)

        try:
            with track_time("detection") as timing:
                differences = self.detect(left, right)
            self.metrics.detection_time = timing.duration

            with track_time("optimization") as timing:
                optimized = optimize_differences(differences)
            self.metrics.optimization_time = timing.duration

            with track_time("aggregation") as timing:
                statistics = calculate_statistics(optimized, left, right)
                summary = generate_summary(optimized, statistics)
            self.metrics.aggregation_time = timing.duration
        except DocumentComparisonError:
            logger.exception("Comparison of %r and %r failed", left.name, right.name)
            raise

        self.metrics.diffs_before_optimization = len(differences)
        self.metrics.diffs_after_optimization = len(optimized)
        self.metrics.total_time = time.perf_counter() - start_time

        logger.info(
            "Comparison complete: %d differences (%d before dedup), similarity %.3f in %.3fs",
            len(optimized), len(differences), statistics.overall_similarity, self.metrics.total_time,
        )
        return ComparisonResult(
            differences=tuple(optimized),
            statistics=statistics,
            summary=summary,
            left_name=left.name,
            right_name=right.name,
        )

    def detect(self, left: DocumentStructure, right: DocumentStructure) -> List[PreciseDifference]:
        """
        Run every differ and concatenate their outputs in differ order.

        In parallel mode the differs share only the two read-only documents;
        results are collected in submission order, so completion order never
        affects the output.
        """
        differs = self.differs()
        if self.config.resolved_parallel():
            with ThreadPoolExecutor(max_workers=self.config.resolved_workers()) as executor:
                futures = [(name, executor.submit(differ, left, right)) for name, differ in differs]
                outputs = [(name, future.result()) for name, future in futures]
        else:
            outputs = [(name, differ(left, right)) for name, differ in differs]

        differences: List[PreciseDifference] = []
        for name, found in outputs:
            self.metrics.differ_counts[name] = len(found)
            differences.extend(found)
        return differences


def compare_documents(
    left: DocumentStructure,
    right: DocumentStructure,
    *,
    parallel: Optional[bool] = None,
    detect_format_changes: Optional[bool] = None,
    section_detector: Optional[SectionDetector] = None,
) -> ComparisonResult:
    """
    Compare two documents end-to-end.

    This is the main entrypoint for programmatic usage.

    Example:
        from comparison.document_builder import build_document
        from pipeline import compare_documents

        result = compare_documents(build_document(["A\\nB\\nC"]), build_document(["A\\nB\\nD"]))
        for diff in result.differences:
            print(diff.left_position.line, diff.diff_type, diff.description)
    """
    config = PipelineConfig(
        parallel=parallel,
        detect_format_changes=detect_format_changes,
        section_detector=section_detector,
    )
    return ComparisonPipeline(config).compare(left, right)
