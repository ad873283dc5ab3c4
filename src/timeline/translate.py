"""Title translation via the Google Translate web endpoint.

Titles are translated in small concurrent batches with a pause between
batches to stay under the endpoint's rate limit. A failed request falls
back to the source title; it never aborts the batch.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

import requests

from timeline.cache import TranslationCache
from timeline.config import TranslationConfig
from timeline.models import Issue
from timeline.observability import PipelineObserver, TranslationStats

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50

Translator = Callable[[str, TranslationConfig], str]


def parse_translation_response(data: Any) -> str:
    """Join the translated fragments of a translate_a/single response.

    The response looks like ``[[["translated", "source", ...], ...], ...]``;
    the first field of each segment in the first element is a fragment.
    """
    if not data or not isinstance(data, list) or not isinstance(data[0], list):
        raise ValueError("Unexpected translation response shape")
    return "".join(
        segment[0]
        for segment in data[0]
        if isinstance(segment, list) and segment and segment[0]
    )


def translate_text(text: str, config: TranslationConfig) -> str:
    """Translate one text, raising on HTTP or format errors."""
    resp = requests.get(
        config.endpoint,
        params={
            "client": "gtx",
            "sl": config.source_lang,
            "tl": config.target_lang,
            "dt": "t",
            "q": text,
        },
        timeout=config.timeout,
    )
    resp.raise_for_status()
    return parse_translation_response(resp.json())


def translate_titles(
    titles: list[str],
    config: TranslationConfig,
    translator: Translator = translate_text,
    observer: PipelineObserver | None = None,
) -> tuple[dict[str, str], int]:
    """Translate titles in rate-limited batches.

    Args:
        titles: Unique titles to translate.
        config: Endpoint, batch width and inter-batch delay.
        translator: Single-title translation function.
        observer: Receives progress every PROGRESS_EVERY titles.

    Returns:
        (title -> translation mapping, number of failed requests).
        Failed titles map to themselves.
    """
    results: dict[str, str] = {}
    failed = 0
    total = len(titles)
    batch_size = max(1, config.batch_size)

    for start in range(0, total, batch_size):
        batch = titles[start:start + batch_size]
        with ThreadPoolExecutor(max_workers=len(batch)) as executor:
            futures = [executor.submit(translator, title, config) for title in batch]
            for title, future in zip(batch, futures):
                try:
                    results[title] = future.result()
                except Exception as exc:
                    logger.warning("Translation failed for (%.40s...): %s", title, exc)
                    results[title] = title
                    failed += 1

        done = start + len(batch)
        if observer is not None and (done % PROGRESS_EVERY == 0 or done == total):
            observer.translation_progress(done, total)

        if done < total:
            time.sleep(config.batch_delay)

    return results, failed


def unique_titles(issues: list[Issue]) -> list[str]:
    """All distinct article titles, in first-seen order."""
    seen: dict[str, None] = {}
    for issue in issues:
        for article in issue.articles:
            seen.setdefault(article.title, None)
    return list(seen)


def enrich_issues(
    issues: list[Issue],
    cache: TranslationCache,
    config: TranslationConfig,
    translator: Translator = translate_text,
    observer: PipelineObserver | None = None,
) -> TranslationStats:
    """Fill titleEn on every article, translating only uncached titles.

    The cache is updated in place; the caller decides whether to save it.
    """
    titles = unique_titles(issues)
    missing = [t for t in titles if t not in cache]
    stats = TranslationStats(
        unique_titles=len(titles),
        cached=len(titles) - len(missing),
        requested=len(missing),
    )

    if missing:
        translations, stats.failed = translate_titles(missing, config, translator, observer)
        cache.update(translations)

    for issue in issues:
        for article in issue.articles:
            translated = cache.get(article.title)
            if translated is not None:
                stats.applied += 1
            article.title_en = translated or article.title

    if observer is not None:
        observer.translation_finished(stats)
    return stats
