"""Compiled keyword rules shared by every classifier.

A rule fires when any of its patterns matches. Patterns are matched
case-insensitively with ASCII word boundaries, so an acronym such as
``\\bAA\\b`` still matches when it runs straight into Hangul text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

RULE_FLAGS = re.IGNORECASE | re.ASCII


@dataclass(frozen=True)
class Rule:
    """A label and the ordered patterns that assign it."""

    label: str
    patterns: tuple[re.Pattern[str], ...]

    def fires(self, text: str) -> bool:
        return matches_any(text, self.patterns)


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile raw regex strings with the shared rule flags."""
    return [re.compile(p, RULE_FLAGS) for p in patterns]


def compile_rules(table: dict[str, list[str]]) -> list[Rule]:
    """Compile a label -> patterns mapping, keeping its order.

    Args:
        table: Mapping loaded from a keyword dictionary YAML file.

    Returns:
        One Rule per label, in source order.
    """
    return [
        Rule(label=str(label), patterns=tuple(compile_patterns(patterns or [])))
        for label, patterns in table.items()
    ]


def matches_any(text: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    """Return True if any pattern is found anywhere in text."""
    return any(p.search(text) for p in patterns)


def fired_labels(text: str, rules: Iterable[Rule]) -> list[str]:
    """Return the labels of every rule that fires on text, in rule order."""
    if not text:
        return []
    return [rule.label for rule in rules if rule.fires(text)]
