"""Article segmentation within an issue.

Two strategies share one interface:

  - LineArticleSegmenter: a table-of-contents style line stream where
    every section header or numbered line is one article title.
  - DocumentArticleSegmenter: a full extracted bulletin where sections
    open on a header, carry a title and byline, then body text.

Both classify each article as it is created, so downstream stages see
fully tagged records.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

from timeline.classifiers.article import classify_article
from timeline.classifiers.rules import matches_any
from timeline.config import RuleTables
from timeline.models import Article, Issue
from timeline.text_processing import (
    clean_title,
    format_body,
    has_toc_page_number,
)

logger = logging.getLogger(__name__)

_NUMBERED_LINE = re.compile(r"^\d+\.\s*")
_PURE_NUMBER = re.compile(r"^\d+$")

# Headers repeated within this many lines are formatting artifacts.
HEADER_DEDUP_WINDOW = 5
MIN_CONTENT_LINES = 3
MIN_CONTENT_LINE_LEN = 10
MIN_BODY_LEN = 50
BODY_EXCERPT_CHARS = 200


def _prefix_pattern(prefixes: list[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(p) for p in prefixes)
    return re.compile(rf"^(?:{alternatives})", re.IGNORECASE)


def _full_line_pattern(phrases: list[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(p) for p in phrases)
    return re.compile(rf"^(?:{alternatives})$", re.IGNORECASE)


class ArticleSegmenter(ABC):
    """Split one issue's lines into classified articles."""

    def __init__(self, rules: RuleTables) -> None:
        self.rules = rules
        self._analysis_header = _prefix_pattern(rules.analysis_prefixes)

    def is_analysis_header(self, line: str) -> bool:
        return bool(self._analysis_header.match(line))

    @abstractmethod
    def segment(self, issue: Issue, lines: list[str]) -> list[Article]:
        """Append the articles found in lines to issue and return them."""


class LineArticleSegmenter(ArticleSegmenter):
    """One article per section-header or numbered line."""

    def __init__(self, rules: RuleTables) -> None:
        super().__init__(rules)
        self._section_marker = _full_line_pattern(rules.section_markers)

    def segment(self, issue: Issue, lines: list[str]) -> list[Article]:
        for line in lines:
            if not line.strip():
                continue
            if self._section_marker.match(line):
                continue

            is_analysis = self.is_analysis_header(line)
            if not is_analysis and not _NUMBERED_LINE.match(line):
                continue

            article = Article(
                id=issue.next_article_id(),
                title=line,
                type="analysis" if is_analysis else "news",
            )
            classify_article(article, self.rules, is_analysis=is_analysis)
            issue.add_article(article)

        return issue.articles


class DocumentArticleSegmenter(ArticleSegmenter):
    """Header / title / byline / body sections of an extracted document.

    Lines are expected trimmed but with blank lines kept, since the body
    formatter reads blank lines as layout.
    """

    def find_headers(self, lines: list[str]) -> list[int]:
        """Return the line indexes of section headers, dropping near repeats.

        A header within the window of the previous detected header, kept
        or not, is a repeat.
        """
        headers: list[int] = []
        previous: int | None = None
        for i, line in enumerate(lines):
            if not self.is_analysis_header(line):
                continue
            if previous is None or i - previous > HEADER_DEDUP_WINDOW:
                headers.append(i)
            previous = i
        return headers

    def _is_byline(self, line: str) -> bool:
        return matches_any(line, self.rules.bylines)

    def split_section(self, lines: list[str]) -> tuple[str, str] | None:
        """Split a section into (title, formatted body).

        Returns:
            None when the section is a cover page, a table-of-contents
            entry, or too short to be an article.
        """
        fragments: list[str] = []
        body_lines: list[str] = []

        for offset, line in enumerate(lines):
            if self._is_byline(line):
                body_lines = lines[offset + 1:]
                break
            if line and not _PURE_NUMBER.match(line):
                fragments.append(line)

        while body_lines and not body_lines[0].strip():
            body_lines = body_lines[1:]

        raw_title = " ".join(fragments)
        if not raw_title.strip() or has_toc_page_number(raw_title):
            return None

        title = clean_title(raw_title)
        body = format_body(body_lines)
        if not title or len(body) < MIN_BODY_LEN:
            return None
        return title, body

    def _sections(self, lines: list[str]) -> tuple[list[tuple[int, int]], bool]:
        """Return (start, end) line ranges and whether they follow headers."""
        headers = self.find_headers(lines)
        if headers:
            bounds = headers[1:] + [len(lines)]
            return [(h + 1, end) for h, end in zip(headers, bounds)], True

        content_lines = sum(1 for line in lines if len(line.strip()) > MIN_CONTENT_LINE_LEN)
        if content_lines >= MIN_CONTENT_LINES:
            return [(0, len(lines))], False
        return [], False

    def segment(self, issue: Issue, lines: list[str]) -> list[Article]:
        sections, from_headers = self._sections(lines)
        discarded = 0

        for start, end in sections:
            parsed = self.split_section(lines[start:end])
            if parsed is None:
                discarded += 1
                continue
            title, body = parsed
            article = Article(
                id=issue.next_article_id(),
                title=title,
                type="analysis" if from_headers else "news",
                body=body,
            )
            classify_article(article, self.rules, body_excerpt_chars=BODY_EXCERPT_CHARS)
            issue.add_article(article)

        if discarded:
            logger.debug(
                "%s: discarded %d of %d sections as non-articles",
                issue.label, discarded, len(sections),
            )
        return issue.articles
