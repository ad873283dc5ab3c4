"""Text processing: line splitting, title cleanup, body reflow.

The body formatter turns extracted document lines into heading and
paragraph blocks. It is a heuristic reflow, so short paragraph lines
next to blank lines are sometimes promoted to headings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

HEADING_MARKER = "[heading] "
BLOCK_SEPARATOR = "\n\n"

HEADING_MIN_LEN = 5
HEADING_MAX_LEN = 100
# Longer lines ending in a period read as sentences, not headings.
HEADING_SENTENCE_LEN = 60

_CITATION_PATTERNS = [
    r"^(?:source|reference|sources|references)\s*[:：]",
    r"^(?:출처|자료|참고|참고자료|주)\s*[:：]",
    r"^[•·∙\-\*※▶►■□○●◦–—]",
    r"^[-\s]*\d+[-\s]*$",
]

_LEADING_NUMBER = re.compile(r"^\d+\.\s")
_TOC_PAGE_NUMBER = re.compile(r"\t\d+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Block:
    """A formatted body block: "heading" or "paragraph"."""

    kind: str
    text: str

    def render(self) -> str:
        if self.kind == "heading":
            return HEADING_MARKER + self.text
        return self.text


def split_lines(text: str, keep_blank: bool = False) -> list[str]:
    """Split raw text into trimmed lines.

    Args:
        text: Raw extracted text.
        keep_blank: Keep empty lines (needed by the body formatter,
            which uses blank lines as layout evidence).
    """
    lines = [line.strip() for line in text.splitlines()]
    if keep_blank:
        return lines
    return [line for line in lines if line]


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def has_toc_page_number(text: str) -> bool:
    """Check for a tab followed by digits, left over from a table of contents."""
    return bool(_TOC_PAGE_NUMBER.search(text))


def clean_title(text: str) -> str:
    """Strip a leading "N. " list prefix and ToC page numbers from a title."""
    text = _LEADING_NUMBER.sub("", text.strip(), count=1)
    text = _TOC_PAGE_NUMBER.sub("", text)
    return normalize_whitespace(text)


def is_citation_line(line: str) -> bool:
    """Check for source/reference notes, bullets and bare page numbers."""
    return any(re.search(p, line, re.IGNORECASE) for p in _CITATION_PATTERNS)


def _is_blank(lines: list[str], index: int) -> bool:
    if index < 0 or index >= len(lines):
        return False
    return not lines[index].strip()


def is_heading(lines: list[str], index: int) -> bool:
    """Decide whether lines[index] reads as a section heading."""
    line = lines[index].strip()
    if not line:
        return False
    if not HEADING_MIN_LEN <= len(line) <= HEADING_MAX_LEN:
        return False
    if not (_is_blank(lines, index - 1) or _is_blank(lines, index + 1)):
        return False
    if len(line) > HEADING_SENTENCE_LEN and line.endswith("."):
        return False
    return not is_citation_line(line)


def to_blocks(lines: list[str]) -> list[Block]:
    """Group lines into heading and paragraph blocks."""
    blocks: list[Block] = []
    paragraph: list[str] = []

    def flush() -> None:
        if paragraph:
            blocks.append(Block("paragraph", " ".join(paragraph)))
            paragraph.clear()

    for i, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            flush()
            continue
        if is_heading(lines, i):
            flush()
            blocks.append(Block("heading", line))
            continue
        paragraph.append(line)

    flush()
    return blocks


def format_body(lines: list[str]) -> str:
    """Render body lines as marker-prefixed headings and plain paragraphs."""
    return BLOCK_SEPARATOR.join(block.render() for block in to_blocks(lines))
