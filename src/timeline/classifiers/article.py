"""Attach tags, people and the highlight flag to a segmented article."""

from __future__ import annotations

from timeline.classifiers.topics import classify_tags, is_highlight
from timeline.config import RuleTables
from timeline.entities import match_people
from timeline.models import Article


def classify_article(
    article: Article,
    rules: RuleTables,
    *,
    is_analysis: bool = False,
    body_excerpt_chars: int = 0,
) -> Article:
    """Classify an article in place and return it.

    Args:
        article: Freshly segmented article.
        rules: Compiled rule catalogs.
        is_analysis: Whether the article opened on an analysis header
            and is therefore a highlight by definition.
        body_excerpt_chars: How much of the body to scan along with the
            title. Zero scans the title only.
    """
    text = article.title
    if body_excerpt_chars and article.body:
        text = f"{text} {article.body[:body_excerpt_chars]}"

    article.tags = classify_tags(text, rules.tags)
    article.people = match_people(text, rules.people)
    article.is_highlight = is_highlight(
        article.title,
        article.tags,
        rules.highlight_keywords,
        is_analysis=is_analysis,
    )
    return article
