"""Configuration management for comparison thresholds, context windows and performance settings."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DOCDIFF_",
        extra="ignore",
    )

    # Detector confidences
    line_confidence: float = Field(
        default=0.9,
        description="Confidence assigned to line-level additions/deletions (exact line matches are reliable)",
    )
    word_confidence: float = Field(
        default=0.8,
        description="Confidence assigned to word-level changes (paragraphs are aligned by position only)",
    )
    section_confidence: float = Field(
        default=0.9,
        description="Confidence assigned to added/removed section headings",
    )
    page_count_confidence: float = Field(
        default=1.0,
        description="Confidence assigned to a page count mismatch",
    )
    format_confidence: float = Field(
        default=0.7,
        description="Confidence assigned to whitespace/case/punctuation-only line changes",
    )

    # Context windows
    line_context_chars: int = Field(
        default=50,
        description="Characters of surrounding text captured before/after a line-level change",
    )
    word_context_chars: int = Field(
        default=10,
        description="Characters of surrounding text captured before/after a word-level change",
    )
    description_preview_chars: int = Field(
        default=50,
        description="Maximum characters of changed content quoted in a difference description",
    )

    # Severity thresholds for line segments: (line count, stripped character length)
    critical_line_count: int = Field(default=10, description="Segments with more lines are critical")
    critical_char_count: int = Field(default=500, description="Segments with more characters are critical")
    high_line_count: int = Field(default=5, description="Segments with more lines are high severity")
    high_char_count: int = Field(default=200, description="Segments with more characters are high severity")
    medium_line_count: int = Field(default=1, description="Segments with more lines are medium severity")
    medium_char_count: int = Field(default=50, description="Segments with more characters are medium severity")
    word_medium_char_count: int = Field(
        default=20,
        description="Word runs longer than this are medium severity, otherwise low",
    )

    # Optional detectors
    detect_format_changes: bool = Field(
        default=True,
        description="Report whitespace/case/punctuation-only line changes as format differences",
    )

    # Summary
    summary_major_changes_limit: int = Field(
        default=5,
        description="Maximum number of high/critical differences listed as major changes",
    )
    low_similarity_threshold: float = Field(
        default=0.5,
        description="Overall similarity below which a full review is recommended",
    )

    # Performance
    parallel_differs: bool = Field(
        default=False,
        description="Run the independent differs on a thread pool",
    )
    num_workers: int = Field(default=4, description="Thread pool size when parallel_differs is enabled")


def get_settings() -> Settings:
    """Return a cached settings instance."""
    return _get_settings()


@lru_cache()
def _get_settings() -> Settings:
    return Settings()


settings = get_settings()
