"""Relevance filtering around the coup cutoff.

Issues before the cutoff are background: only highlighted articles on
critical themes survive, and the issue is flagged isBackground. Issues
from the cutoff on go through a keyword/tag inclusion-exclusion pass.
Issues left without articles are dropped in both windows.
"""

from __future__ import annotations

from collections import Counter

from timeline.classifiers.rules import matches_any
from timeline.config import RuleTables
from timeline.entities import count_mentions
from timeline.models import Article, Issue, article_count
from timeline.observability import FilterStats, PipelineObserver

DEFAULT_CUTOFF = "2021-02"


def is_background_worthy(article: Article, rules: RuleTables) -> bool:
    """Keep a pre-cutoff article only if it is a highlight on a critical theme."""
    if not article.is_highlight:
        return False
    if any(tag in rules.critical_tags for tag in article.tags):
        return True
    return matches_any(article.title, rules.pre_event_keywords)


def is_crisis_relevant(article: Article, rules: RuleTables) -> bool:
    """Decide whether a post-cutoff article belongs on the timeline.

    Evidence is checked in order: crisis tags, named people, highlight,
    the irrelevance denylist (drop), crisis keywords, then the
    always-kept economy and energy tags.
    """
    if any(tag in rules.crisis_tags for tag in article.tags):
        return True
    if article.people:
        return True
    if article.is_highlight:
        return True

    if matches_any(article.title, rules.irrelevant):
        return False
    if matches_any(article.title, rules.crisis_keywords):
        return True

    return any(tag in article.tags for tag in rules.always_keep_tags)


def curate_background(issues: list[Issue], rules: RuleTables) -> list[Issue]:
    """Reduce pre-cutoff issues to their critical highlights."""
    curated: list[Issue] = []
    for issue in issues:
        kept = [a for a in issue.articles if is_background_worthy(a, rules)]
        if kept:
            curated.append(issue.with_articles(kept, is_background=True))
    return curated


def filter_main_period(issues: list[Issue], rules: RuleTables) -> list[Issue]:
    """Drop irrelevant post-cutoff articles, then empty issues."""
    filtered: list[Issue] = []
    for issue in issues:
        kept = [a for a in issue.articles if is_crisis_relevant(a, rules)]
        if kept:
            filtered.append(issue.with_articles(kept))
    return filtered


def _tag_counts(issues: list[Issue]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for issue in issues:
        for article in issue.articles:
            counts.update(article.tags)
    return counts


def apply_relevance_filter(
    issues: list[Issue],
    rules: RuleTables,
    cutoff: str = DEFAULT_CUTOFF,
    observer: PipelineObserver | None = None,
) -> list[Issue]:
    """Split issues at the cutoff month, filter each side, and recombine.

    Args:
        issues: Classified issues from a source pass.
        rules: Compiled rule catalogs.
        cutoff: First "YYYY-MM" month of the main period.
        observer: Receives the filter statistics.

    Returns:
        Background issues followed by main-period issues, ordered by date.
    """
    background_src = [i for i in issues if i.date < cutoff]
    main_src = [i for i in issues if i.date >= cutoff]

    background = curate_background(background_src, rules)
    main = filter_main_period(main_src, rules)

    result = sorted(background + main, key=lambda i: i.date)

    if observer is not None:
        observer.filter_finished(FilterStats(
            main_before=article_count(main_src),
            main_after=article_count(main),
            background_issues=len(background),
            background_articles=article_count(background),
            total_issues=len(result),
            total_articles=article_count(result),
            tag_counts=_tag_counts(result),
            people_counts=count_mentions(result),
        ))
    return result
