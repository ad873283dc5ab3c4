"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from timeline.cli import main
from timeline.config import AppConfig


class TestCli:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_parse(self, app_config: AppConfig, sample_lines: list[str]) -> None:
        Path(app_config.paths.source_text).write_text("\n".join(sample_lines), encoding="utf-8")
        with patch("timeline.cli.load_config", return_value=app_config):
            result = CliRunner().invoke(main, ["parse", "--env", "dev"])

        assert result.exit_code == 0, result.output
        assert "Parsed 3 issues" in result.output
        assert "Articles: 5" in result.output

    def test_parse_missing_source(self, app_config: AppConfig) -> None:
        with patch("timeline.cli.load_config", return_value=app_config):
            result = CliRunner().invoke(main, ["parse"])

        assert result.exit_code != 0
        assert "Cannot read source" in result.output

    def test_extract_missing_directory(self, app_config: AppConfig) -> None:
        with patch("timeline.cli.load_config", return_value=app_config):
            result = CliRunner().invoke(main, ["extract"])

        assert result.exit_code != 0
        assert "Documents directory not found" in result.output

    def test_extract_empty_tree(self, app_config: AppConfig) -> None:
        Path(app_config.paths.documents_dir).mkdir(parents=True)
        with patch("timeline.cli.load_config", return_value=app_config):
            result = CliRunner().invoke(main, ["extract"])

        assert result.exit_code == 0, result.output
        assert "Extracted 0 issues" in result.output

    @patch("timeline.translate.requests.get")
    def test_translate(
        self, mock_get: MagicMock, app_config: AppConfig, sample_lines: list[str],
    ) -> None:
        mock_resp = MagicMock()
        mock_resp.json.return_value = [[["Translated", "원문"]]]
        mock_get.return_value = mock_resp

        Path(app_config.paths.source_text).write_text("\n".join(sample_lines), encoding="utf-8")
        with patch("timeline.cli.load_config", return_value=app_config):
            runner = CliRunner()
            assert runner.invoke(main, ["parse"]).exit_code == 0
            result = runner.invoke(main, ["translate"])

        assert result.exit_code == 0, result.output
        assert "Translated 5 new titles (0 failed)" in result.output
        data = json.loads(Path(app_config.paths.dataset).read_text(encoding="utf-8"))
        assert data["issues"][0]["articles"][0]["titleEn"] == "Translated"

    def test_invalid_env_rejected(self) -> None:
        result = CliRunner().invoke(main, ["parse", "--env", "staging"])
        assert result.exit_code == 2
