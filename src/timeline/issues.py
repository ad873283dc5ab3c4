"""Issue segmentation.

Splits a line stream on monthly issue headers such as
"2021년 2월호(통권61호) 목차". Headers must occupy the whole line.
"""

from __future__ import annotations

import logging
import re

from timeline.models import Issue

logger = logging.getLogger(__name__)

_ISSUE_HEADER_PATTERNS = [
    re.compile(r"^(\d{4})년\s*(\d{1,2})월호\s*\(통권\s*(\d+)호\)\s*목차?$"),
    re.compile(r"^(\d{4})년\s*(\d{1,2})월호\s*\(통권\s*(\d+)호\)$"),
]
_INAUGURAL_HEADER = re.compile(r"^(\d{4})년\s*(\d{1,2})월호\s*\(창간호\)\s*목차?$")
INAUGURAL_ISSUE_NUM = 1


def make_issue(year: str | int, month: str | int, issue_num: int) -> Issue:
    """Build an empty issue for a year/month.

    The date key is zero-padded; the display label keeps the month as written.
    """
    return Issue(
        date=f"{int(year):04d}-{int(month):02d}",
        label=f"{year}년 {month}월호",
        issue_num=issue_num,
    )


def is_valid_issue(year: str | int, month: str | int, issue_num: int) -> bool:
    """Check that a parsed year, month and issue number can form an Issue."""
    return int(year) >= 1 and 1 <= int(month) <= 12 and issue_num >= 1


def _match_header(line: str) -> tuple[str, str, int] | None:
    """Return (year, month, issue number) if line has a header layout."""
    for pattern in _ISSUE_HEADER_PATTERNS:
        match = pattern.match(line)
        if match:
            year, month, num = match.groups()
            return year, month, int(num)

    match = _INAUGURAL_HEADER.match(line)
    if match:
        year, month = match.groups()
        return year, month, INAUGURAL_ISSUE_NUM

    return None


def parse_issue_header(line: str) -> Issue | None:
    """Parse an issue header line into an empty Issue.

    A line with the header layout but an impossible month or issue
    number is logged and rejected.

    Returns:
        The opened Issue, or None if the line is not a valid header.
    """
    parsed = _match_header(line)
    if parsed is None:
        return None
    year, month, num = parsed
    if not is_valid_issue(year, month, num):
        logger.warning("Skipping issue header with invalid month or number: %s", line)
        return None
    return make_issue(year, month, num)


def segment_issues(lines: list[str]) -> list[tuple[Issue, list[str]]]:
    """Partition a line stream into per-issue groups.

    Lines before the first header are discarded, as are the lines under
    a rejected header. A document without any header yields no groups.

    Args:
        lines: Ordered, trimmed lines.

    Returns:
        (issue, body lines) pairs in document order.
    """
    groups: list[tuple[Issue, list[str]]] = []
    current: tuple[Issue, list[str]] | None = None
    skipped = 0

    for line in lines:
        if _match_header(line) is not None:
            if current is not None:
                groups.append(current)
            issue = parse_issue_header(line)
            current = (issue, []) if issue is not None else None
            continue
        if current is None:
            skipped += 1
            continue
        current[1].append(line)

    if current is not None:
        groups.append(current)

    if skipped:
        logger.debug("Discarded %d lines outside any issue", skipped)
    return groups
