"""Topic tagging and highlight decision.

Tags come from the static tag table in tags.yaml. Rules are evaluated
independently, so one title can carry every tag in the table.
"""

from __future__ import annotations

import re
from typing import Iterable

from timeline.classifiers.rules import Rule, fired_labels, matches_any

# A coup story escalates to a highlight when paired with either of these.
HIGHLIGHT_COMPANION_TAGS = ("sanctions", "human_rights")


def classify_tags(text: str, tag_rules: Iterable[Rule]) -> list[str]:
    """Classify text into topic tags.

    Args:
        text: Article title, optionally followed by a body excerpt.
        tag_rules: Compiled tag table.

    Returns:
        Tag labels in table order, without duplicates.
    """
    return fired_labels(text, tag_rules)


def is_highlight(
    title: str,
    tags: list[str],
    highlight_keywords: Iterable[re.Pattern[str]],
    *,
    is_analysis: bool = False,
) -> bool:
    """Decide whether an article is an editorial highlight.

    An article is a highlight when it is an analysis piece, when it is
    tagged coup together with sanctions or human_rights, or when its
    title names a key event (emergency declaration, death sentence,
    arrest warrant, operation 1027 and so on).
    """
    if is_analysis:
        return True
    if "coup" in tags and any(t in tags for t in HIGHLIGHT_COMPANION_TAGS):
        return True
    return matches_any(title, highlight_keywords)
