"""Environment-aware configuration loader.

Loads YAML config from config/timeline.{env}.yaml and rule catalogs
from config/keyword_dicts/.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from timeline.classifiers.rules import Rule, compile_patterns, compile_rules

VALID_ENVS = ("dev", "prod")
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


@dataclass(frozen=True)
class PathsConfig:
    """Filesystem paths for data I/O."""

    source_text: str
    documents_dir: str
    dataset: str
    translation_cache: str


@dataclass(frozen=True)
class FilterConfig:
    """Relevance filter settings."""

    cutoff: str = "2021-02"


@dataclass(frozen=True)
class TranslationConfig:
    """Settings for the title translation pass."""

    endpoint: str = "https://translate.googleapis.com/translate_a/single"
    source_lang: str = "ko"
    target_lang: str = "en"
    batch_size: int = 8
    batch_delay: float = 0.6
    timeout: float = 15


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class RuleTables:
    """Compiled rule catalogs.

    Every table keeps the order of its YAML source so classifier output
    is deterministic.
    """

    tags: list[Rule] = field(default_factory=list)
    people: list[Rule] = field(default_factory=list)
    analysis_prefixes: list[str] = field(default_factory=list)
    section_markers: list[str] = field(default_factory=list)
    bylines: list[re.Pattern[str]] = field(default_factory=list)
    highlight_keywords: list[re.Pattern[str]] = field(default_factory=list)
    critical_tags: frozenset[str] = frozenset()
    pre_event_keywords: list[re.Pattern[str]] = field(default_factory=list)
    crisis_tags: frozenset[str] = frozenset()
    always_keep_tags: tuple[str, ...] = ()
    irrelevant: list[re.Pattern[str]] = field(default_factory=list)
    crisis_keywords: list[re.Pattern[str]] = field(default_factory=list)


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    env: str
    paths: PathsConfig
    filter: FilterConfig
    translation: TranslationConfig
    logging: LoggingConfig
    rules: RuleTables


def detect_env(cli_env: str | None = None) -> str:
    """Detect the runtime environment.

    Priority:
      1. Explicit CLI flag
      2. TIMELINE_ENV environment variable
      3. Default to 'dev'
    """
    env = cli_env or os.environ.get("TIMELINE_ENV", "dev")
    if env not in VALID_ENVS:
        raise ValueError(f"Invalid environment '{env}'. Must be one of {VALID_ENVS}")
    return env


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_rule_tables(config_dir: Path) -> RuleTables:
    """Load and compile every keyword dictionary under config_dir/keyword_dicts."""
    kw_dir = config_dir / "keyword_dicts"

    tags = _load_yaml(kw_dir / "tags.yaml")
    people = _load_yaml(kw_dir / "people.yaml")
    sections = _load_yaml(kw_dir / "sections.yaml")
    relevance = _load_yaml(kw_dir / "relevance.yaml")

    return RuleTables(
        tags=compile_rules(tags),
        people=compile_rules(people),
        analysis_prefixes=list(sections.get("analysis_prefixes", [])),
        section_markers=list(sections.get("section_markers", [])),
        bylines=compile_patterns(sections.get("bylines", [])),
        highlight_keywords=compile_patterns(relevance.get("highlight_keywords", [])),
        critical_tags=frozenset(relevance.get("critical_tags", [])),
        pre_event_keywords=compile_patterns(relevance.get("pre_event_keywords", [])),
        crisis_tags=frozenset(relevance.get("crisis_tags", [])),
        always_keep_tags=tuple(relevance.get("always_keep_tags", [])),
        irrelevant=compile_patterns(relevance.get("irrelevant", [])),
        crisis_keywords=compile_patterns(relevance.get("crisis_keywords", [])),
    )


def resolve_path(path_str: str) -> Path:
    """Resolve a path relative to the project root."""
    p = Path(path_str)
    if p.is_absolute():
        return p
    return (PROJECT_ROOT / p).resolve()


def load_config(
    env: str | None = None,
    config_dir: Path | None = None,
) -> AppConfig:
    """Load and parse the YAML config for the given environment.

    Args:
        env: The environment name (dev/prod). Auto-detected if None.
        config_dir: Override the config directory path.

    Returns:
        Fully resolved AppConfig instance.
    """
    resolved_env = detect_env(env)
    resolved_config_dir = config_dir or PROJECT_ROOT / "config"
    config_path = resolved_config_dir / f"timeline.{resolved_env}.yaml"

    raw = _load_yaml(config_path)

    paths_raw = raw.get("paths", {})
    paths = PathsConfig(
        source_text=paths_raw.get("source_text", "data/docx_output.txt"),
        documents_dir=paths_raw.get("documents_dir", "data/documents"),
        dataset=paths_raw.get("dataset", "site/data.json"),
        translation_cache=paths_raw.get("translation_cache", "site/translations_cache.json"),
    )

    filter_raw = raw.get("filter", {})
    filter_cfg = FilterConfig(cutoff=str(filter_raw.get("cutoff", "2021-02")))

    translation_raw = raw.get("translation", {})
    defaults = TranslationConfig()
    translation = TranslationConfig(
        endpoint=translation_raw.get("endpoint", defaults.endpoint),
        source_lang=translation_raw.get("source_lang", defaults.source_lang),
        target_lang=translation_raw.get("target_lang", defaults.target_lang),
        batch_size=int(translation_raw.get("batch_size", defaults.batch_size)),
        batch_delay=float(translation_raw.get("batch_delay", defaults.batch_delay)),
        timeout=float(translation_raw.get("timeout", defaults.timeout)),
    )

    logging_raw = raw.get("logging", {})
    logging_cfg = LoggingConfig(
        level=logging_raw.get("level", "INFO"),
        format=logging_raw.get("format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s"),
    )

    return AppConfig(
        env=resolved_env,
        paths=paths,
        filter=filter_cfg,
        translation=translation,
        logging=logging_cfg,
        rules=load_rule_tables(resolved_config_dir),
    )
