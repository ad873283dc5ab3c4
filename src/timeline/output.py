"""Dataset reading and writing.

The dataset is ``{"issues": [...]}`` written as compact JSON, fully
overwriting any previous file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from timeline.models import Issue
from timeline.sources import SourceReadError

logger = logging.getLogger(__name__)


def dataset_to_dict(issues: list[Issue]) -> dict[str, Any]:
    return {"issues": [issue.to_dict() for issue in issues]}


def dumps_dataset(issues: list[Issue]) -> str:
    """Serialize issues as compact JSON."""
    return json.dumps(dataset_to_dict(issues), ensure_ascii=False, separators=(",", ":"))


def write_dataset(issues: list[Issue], path: Path) -> Path:
    """Write the dataset file, creating parent directories as needed.

    Args:
        issues: Final issues in date order.
        path: Target file.

    Returns:
        Path to the written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_dataset(issues))
    logger.debug("Wrote dataset to %s", path)
    return path


def read_dataset(path: Path) -> list[Issue]:
    """Load a dataset file written by write_dataset.

    Raises:
        SourceReadError: If the file is missing or not a valid dataset.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise SourceReadError(f"Cannot read dataset {path}: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("issues"), list):
        raise SourceReadError(f"Dataset {path} has no 'issues' list")

    try:
        return [Issue.from_dict(item) for item in data["issues"]]
    except (KeyError, TypeError, ValueError) as exc:
        raise SourceReadError(f"Malformed issue in dataset {path}: {exc}") from exc
