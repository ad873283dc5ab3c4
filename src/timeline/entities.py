"""Dictionary-based entity matching.

Scans article titles for mentions of known actors using the
people.yaml dictionary, and returns matched entity labels.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from timeline.classifiers.rules import Rule, fired_labels
from timeline.models import Issue


def match_people(text: str, people_rules: Iterable[Rule]) -> list[str]:
    """Find all entity labels mentioned in text.

    Args:
        text: Text to scan.
        people_rules: Compiled people table.

    Returns:
        Entity labels in table order, without duplicates.
    """
    return fired_labels(text, people_rules)


def count_mentions(issues: Iterable[Issue]) -> Counter[str]:
    """Count how many articles mention each entity across issues."""
    counts: Counter[str] = Counter()
    for issue in issues:
        for article in issue.articles:
            counts.update(article.people)
    return counts
