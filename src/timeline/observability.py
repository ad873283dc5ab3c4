"""Progress and statistics hooks.

Pipeline stages report through a PipelineObserver instead of writing
to the console. The base class ignores everything; LoggingObserver
forwards to the ``timeline`` logger.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger("timeline")


@dataclass
class FilterStats:
    """Counts gathered by one relevance-filter pass."""

    main_before: int = 0
    main_after: int = 0
    background_issues: int = 0
    background_articles: int = 0
    total_issues: int = 0
    total_articles: int = 0
    tag_counts: Counter[str] = field(default_factory=Counter)
    people_counts: Counter[str] = field(default_factory=Counter)


@dataclass
class TranslationStats:
    """Counts gathered by one enrichment pass."""

    unique_titles: int = 0
    cached: int = 0
    requested: int = 0
    failed: int = 0
    applied: int = 0


class PipelineObserver:
    """No-op observer. Subclass and override what you need."""

    def source_loaded(self, source: str, lines: int) -> None:
        pass

    def issue_parsed(self, label: str, articles: int) -> None:
        pass

    def document_failed(self, source: str, error: Exception) -> None:
        pass

    def filter_finished(self, stats: FilterStats) -> None:
        pass

    def translation_progress(self, done: int, total: int) -> None:
        pass

    def translation_finished(self, stats: TranslationStats) -> None:
        pass

    def dataset_written(self, path: Path, issues: int, articles: int) -> None:
        pass


class LoggingObserver(PipelineObserver):
    """Observer that reports through the standard logging module."""

    def source_loaded(self, source: str, lines: int) -> None:
        logger.info("Loaded %d lines from %s", lines, source)

    def issue_parsed(self, label: str, articles: int) -> None:
        logger.debug("Parsed %s: %d articles", label, articles)

    def document_failed(self, source: str, error: Exception) -> None:
        logger.warning("Skipping %s (extraction failed: %s)", source, error)

    def filter_finished(self, stats: FilterStats) -> None:
        logger.info(
            "Main period: %d -> %d articles after relevance filter",
            stats.main_before, stats.main_after,
        )
        logger.info(
            "Background: %d articles from %d issues",
            stats.background_articles, stats.background_issues,
        )
        logger.info(
            "Kept %d issues with %d total articles",
            stats.total_issues, stats.total_articles,
        )
        logger.info("Tag distribution: %s", dict(stats.tag_counts.most_common()))
        logger.debug("People distribution: %s", dict(stats.people_counts.most_common()))

    def translation_progress(self, done: int, total: int) -> None:
        logger.info("Translated %d/%d titles...", done, total)

    def translation_finished(self, stats: TranslationStats) -> None:
        logger.info(
            "Translation: %d unique, %d cached, %d requested, %d failed, %d applied",
            stats.unique_titles, stats.cached, stats.requested, stats.failed, stats.applied,
        )

    def dataset_written(self, path: Path, issues: int, articles: int) -> None:
        logger.info("Wrote %d issues (%d articles) to %s", issues, articles, path)
