"""Persistent title translation cache.

Maps the exact source title to its translation. Entries are only ever
added; the file is read once per run and written once at the end.
Keys are not normalized, so a change in title cleanup orphans the old
entries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from timeline.sources import SourceReadError

logger = logging.getLogger(__name__)


class TranslationCache:
    """Title -> translation mapping backed by a pretty-printed JSON file."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def load(cls, path: Path) -> TranslationCache:
        """Load the cache file, or start empty if it does not exist yet.

        Raises:
            SourceReadError: If the file exists but is not a JSON object.
        """
        if not path.exists():
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise SourceReadError(f"Cannot read translation cache {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SourceReadError(f"Translation cache {path} is not a JSON object")
        logger.info("Loaded %d cached translations", len(data))
        return cls({str(k): str(v) for k, v in data.items()})

    def get(self, title: str) -> str | None:
        """Return the cached translation; empty values count as missing."""
        return self._entries.get(title) or None

    def __contains__(self, title: object) -> bool:
        return isinstance(title, str) and self.get(title) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def update(self, translations: dict[str, str]) -> None:
        self._entries.update(translations)

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self._entries, f, ensure_ascii=False, indent=2)
        logger.info("Saved translation cache (%d entries)", len(self._entries))
        return path
