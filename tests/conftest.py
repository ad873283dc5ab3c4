"""Shared fixtures for timeline tests."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from timeline.config import AppConfig, PathsConfig, RuleTables, load_config, load_rule_tables
from timeline.models import Article, Issue
from timeline.observability import FilterStats, PipelineObserver, TranslationStats


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the config directory."""
    return project_root / "config"


@pytest.fixture
def rules(config_dir: Path) -> RuleTables:
    """Compiled rule catalogs from config/keyword_dicts."""
    return load_rule_tables(config_dir)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Dev config with every path pointed into tmp_path."""
    config = load_config("dev")
    paths = PathsConfig(
        source_text=str(tmp_path / "docx_output.txt"),
        documents_dir=str(tmp_path / "documents"),
        dataset=str(tmp_path / "site" / "data.json"),
        translation_cache=str(tmp_path / "site" / "translations_cache.json"),
    )
    translation = dataclasses.replace(config.translation, batch_delay=0)
    return dataclasses.replace(config, paths=paths, translation=translation)


class RecordingObserver(PipelineObserver):
    """Observer that keeps every event for assertions."""

    def __init__(self) -> None:
        self.parsed: list[tuple[str, int]] = []
        self.failures: list[tuple[str, Exception]] = []
        self.filter_stats: list[FilterStats] = []
        self.progress: list[tuple[int, int]] = []
        self.translation_stats: list[TranslationStats] = []
        self.written: list[tuple[Path, int, int]] = []

    def issue_parsed(self, label: str, articles: int) -> None:
        self.parsed.append((label, articles))

    def document_failed(self, source: str, error: Exception) -> None:
        self.failures.append((source, error))

    def filter_finished(self, stats: FilterStats) -> None:
        self.filter_stats.append(stats)

    def translation_progress(self, done: int, total: int) -> None:
        self.progress.append((done, total))

    def translation_finished(self, stats: TranslationStats) -> None:
        self.translation_stats.append(stats)

    def dataset_written(self, path: Path, issues: int, articles: int) -> None:
        self.written.append((path, issues, articles))


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def sample_lines() -> list[str]:
    """A small text dump: one pre-cutoff issue and two post-cutoff issues."""
    return [
        "미얀마 경제 동향 월간지",
        "2020년 11월호(통권59호) 목차",
        "HOT ISSUE 미얀마 총선 결과와 전망",
        "ISSUE ANALYSIS 양곤 신규 공단 개발",
        "1. 양곤 골프장 개장",
        "2021년 2월호(통권61호) 목차",
        "HOT ISSUE 미얀마 군부 비상사태 선포",
        "주요 경제 외교 뉴스",
        "1. 미얀마 군부 쿠데타 선언",
        "2. 양곤 골프 대회 개최",
        "3. 양곤 환율 동향",
        "경제통계",
        "본문에 포함되지 않는 안내 문구",
        "2021년 3월호(통권62호)",
        "1. 중국 왕이 외교부장 방문",
        "2. 신규 카페 개점",
    ]


@pytest.fixture
def sample_issue() -> Issue:
    """A classified post-cutoff issue with mixed relevance."""
    return Issue(
        date="2021-04",
        label="2021년 4월호",
        issue_num=63,
        articles=[
            Article(id="63-0", title="1. 미얀마 군부 쿠데타 선언", tags=["coup"], is_highlight=True),
            Article(id="63-1", title="2. 양곤 환율 동향", tags=["economy"]),
            Article(id="63-2", title="3. 양곤 골프 대회 개최"),
        ],
    )
