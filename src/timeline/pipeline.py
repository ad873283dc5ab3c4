"""End-to-end pipeline runs.

Source -> issues -> articles -> classification -> relevance filter ->
dataset file, for both input shapes, plus the separate translation pass.
"""

from __future__ import annotations

import logging
from pathlib import Path

from timeline.cache import TranslationCache
from timeline.config import AppConfig, RuleTables, resolve_path
from timeline.issues import is_valid_issue, make_issue, segment_issues
from timeline.models import Issue, article_count
from timeline.observability import LoggingObserver, PipelineObserver, TranslationStats
from timeline.output import read_dataset, write_dataset
from timeline.relevance import DEFAULT_CUTOFF, apply_relevance_filter
from timeline.segmenter import DocumentArticleSegmenter, LineArticleSegmenter
from timeline.sources import (
    DocumentRef,
    TextExtractor,
    discover_documents,
    extract_document_text,
    read_source_lines,
)
from timeline.text_processing import split_lines
from timeline.translate import Translator, enrich_issues, translate_text

logger = logging.getLogger(__name__)


def parse_line_stream(
    lines: list[str],
    rules: RuleTables,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Segment and classify a plain-text dump, before relevance filtering."""
    observer = observer or PipelineObserver()
    segmenter = LineArticleSegmenter(rules)
    issues: list[Issue] = []

    for issue, issue_lines in segment_issues(lines):
        segmenter.segment(issue, issue_lines)
        observer.issue_parsed(issue.label, len(issue.articles))
        issues.append(issue)
    return issues


def _document_issue(ref: DocumentRef, lines: list[str], ordinal: int) -> Issue | None:
    """Open the issue for a document.

    The file name gives the month. The issue number comes from a header
    inside the text, else the file name, else the document's position.

    Returns:
        None when the reference carries an impossible year or month.
    """
    groups = segment_issues([line for line in lines if line])
    if groups:
        issue_num = groups[0][0].issue_num
    else:
        issue_num = ref.issue_num or ordinal
    if not is_valid_issue(ref.year, ref.month, issue_num):
        logger.warning("Skipping %s (invalid date %s-%s)", ref.path, ref.year, ref.month)
        return None
    return make_issue(ref.year, ref.month, issue_num)


def parse_documents(
    documents: list[DocumentRef],
    rules: RuleTables,
    extractor: TextExtractor = extract_document_text,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Extract, segment and classify one issue per document.

    A document whose extraction raises is reported and skipped, as is one
    whose reference carries an impossible month.
    """
    observer = observer or PipelineObserver()
    segmenter = DocumentArticleSegmenter(rules)
    issues: list[Issue] = []

    for ordinal, ref in enumerate(documents, start=1):
        try:
            text = extractor(ref.path)
        except Exception as exc:
            observer.document_failed(str(ref.path), exc)
            continue

        lines = split_lines(text, keep_blank=True)
        issue = _document_issue(ref, lines, ordinal)
        if issue is None:
            continue
        segmenter.segment(issue, lines)
        observer.issue_parsed(issue.label, len(issue.articles))
        issues.append(issue)
    return issues


def build_from_lines(
    lines: list[str],
    rules: RuleTables,
    cutoff: str = DEFAULT_CUTOFF,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Line-stream variant: parse then filter."""
    issues = parse_line_stream(lines, rules, observer)
    return apply_relevance_filter(issues, rules, cutoff, observer)


def build_from_documents(
    documents: list[DocumentRef],
    rules: RuleTables,
    cutoff: str = DEFAULT_CUTOFF,
    extractor: TextExtractor = extract_document_text,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Document-extraction variant: extract, parse, then filter."""
    issues = parse_documents(documents, rules, extractor, observer)
    return apply_relevance_filter(issues, rules, cutoff, observer)


def _write(issues: list[Issue], path: Path, observer: PipelineObserver) -> Path:
    written = write_dataset(issues, path)
    observer.dataset_written(written, len(issues), article_count(issues))
    return written


def run_line_stream(config: AppConfig, observer: PipelineObserver | None = None) -> list[Issue]:
    """Build the dataset from the configured text dump."""
    observer = observer or LoggingObserver()
    source = resolve_path(config.paths.source_text)
    lines = read_source_lines(source)
    observer.source_loaded(str(source), len(lines))

    issues = build_from_lines(lines, config.rules, config.filter.cutoff, observer)
    _write(issues, resolve_path(config.paths.dataset), observer)
    return issues


def run_document_extraction(
    config: AppConfig,
    extractor: TextExtractor = extract_document_text,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Build the dataset from the configured year-folder document tree."""
    observer = observer or LoggingObserver()
    root = resolve_path(config.paths.documents_dir)
    documents = discover_documents(root)
    logger.info("Found %d documents under %s", len(documents), root)

    issues = build_from_documents(
        documents, config.rules, config.filter.cutoff, extractor, observer,
    )
    _write(issues, resolve_path(config.paths.dataset), observer)
    return issues


def run_translation(
    config: AppConfig,
    translator: Translator = translate_text,
    observer: PipelineObserver | None = None,
) -> TranslationStats:
    """Add titleEn to the dataset file, using and extending the cache."""
    observer = observer or LoggingObserver()
    dataset_path = resolve_path(config.paths.dataset)
    cache_path = resolve_path(config.paths.translation_cache)

    issues = read_dataset(dataset_path)
    cache = TranslationCache.load(cache_path)

    stats = enrich_issues(issues, cache, config.translation, translator, observer)
    if stats.requested:
        cache.save(cache_path)

    _write(issues, dataset_path, observer)
    return stats
