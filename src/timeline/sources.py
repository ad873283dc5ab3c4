"""Source adapters: plain-text dumps and per-month bulletin documents.

Documents are laid out as ``<documents_dir>/<year folder>/<file>`` where
the file name carries "{year}년 {month}월호" and, optionally, "통권{N}".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import docx

from timeline.issues import is_valid_issue
from timeline.text_processing import split_lines

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".docx", ".txt")

_DOCUMENT_NAME = re.compile(r"(\d{4})년\s*(\d{1,2})월호")
_DOCUMENT_ISSUE_NUM = re.compile(r"통권\s*(\d+)")

TextExtractor = Callable[[Path], str]


class SourceReadError(Exception):
    """Raised when a source file or directory cannot be read."""


@dataclass(frozen=True)
class DocumentRef:
    """A discovered bulletin document and what its file name tells us."""

    path: Path
    year: int
    month: int
    issue_num: int | None = None

    @property
    def label(self) -> str:
        return f"{self.year}년 {self.month}월호"


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, raising SourceReadError on failure."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read source {path}: {exc}") from exc


def read_source_lines(path: Path) -> list[str]:
    """Read a plain-text dump as trimmed, non-empty lines."""
    return split_lines(read_text(path))


def extract_docx_text(path: Path) -> str:
    """Extract paragraph text from a .docx file, one paragraph per line."""
    document = docx.Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_document_text(path: Path) -> str:
    """Default extractor: python-docx for .docx, UTF-8 read for .txt."""
    if path.suffix.lower() == ".docx":
        return extract_docx_text(path)
    return read_text(path)


def parse_document_name(name: str) -> tuple[int, int, int | None] | None:
    """Parse (year, month, issue number) from a document file name."""
    match = _DOCUMENT_NAME.search(name)
    if not match:
        return None
    num_match = _DOCUMENT_ISSUE_NUM.search(name)
    issue_num = int(num_match.group(1)) if num_match else None
    return int(match.group(1)), int(match.group(2)), issue_num


def discover_documents(root: Path) -> list[DocumentRef]:
    """Find bulletin documents under year folders, ordered by issue month.

    Files whose names carry no "{year}년 {month}월호", or an impossible
    month or issue number, are logged and skipped.

    Raises:
        SourceReadError: If root is missing or not a directory.
    """
    if not root.is_dir():
        raise SourceReadError(f"Documents directory not found: {root}")

    refs: list[DocumentRef] = []
    for year_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        for path in sorted(year_dir.iterdir()):
            # Word keeps "~$name.docx" lock files next to open documents.
            if not path.is_file() or path.name.startswith("~$"):
                continue
            if path.suffix.lower() not in DOCUMENT_SUFFIXES:
                continue
            parsed = parse_document_name(path.stem)
            if parsed is None:
                logger.warning("Skipping %s (no year/month in file name)", path)
                continue
            year, month, issue_num = parsed
            if not is_valid_issue(year, month, 1 if issue_num is None else issue_num):
                logger.warning("Skipping %s (invalid month or issue number in file name)", path)
                continue
            refs.append(DocumentRef(path=path, year=year, month=month, issue_num=issue_num))

    refs.sort(key=lambda r: (r.year, r.month))
    return refs
