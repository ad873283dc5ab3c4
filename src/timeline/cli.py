"""CLI entry point for the timeline pipeline.

Provides three commands:
  - timeline parse: Build the dataset from the plain-text dump
  - timeline extract: Build the dataset from per-month documents
  - timeline translate: Add English titles to the dataset
"""

from __future__ import annotations

import logging
import sys

import click

from timeline import __version__
from timeline.config import AppConfig, load_config
from timeline.pipeline import run_document_extraction, run_line_stream, run_translation
from timeline.sources import SourceReadError

logger = logging.getLogger("timeline")

_ENV_OPTION = click.option(
    "--env", type=click.Choice(["dev", "prod"]), default=None,
    help="Environment (default: dev or TIMELINE_ENV)",
)


def _setup_logging(level: str, fmt: str) -> None:
    """Configure logging for the pipeline."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt,
        stream=sys.stderr,
    )


def _configure(env: str | None) -> AppConfig:
    config = load_config(env=env)
    _setup_logging(config.logging.level, config.logging.format)
    return config


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Myanmar bulletin timeline builder."""


@main.command()
@_ENV_OPTION
def parse(env: str | None) -> None:
    """Build the dataset from the plain-text bulletin dump."""
    config = _configure(env)
    logger.info("Parsing text dump (env=%s)", config.env)
    try:
        issues = run_line_stream(config)
    except SourceReadError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Parsed {len(issues)} issues")
    click.echo(f"  Articles: {sum(len(i.articles) for i in issues)}")
    click.echo(f"  Output:   {config.paths.dataset}")


@main.command()
@_ENV_OPTION
def extract(env: str | None) -> None:
    """Build the dataset from per-month bulletin documents."""
    config = _configure(env)
    logger.info("Extracting documents (env=%s)", config.env)
    try:
        issues = run_document_extraction(config)
    except SourceReadError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Extracted {len(issues)} issues")
    click.echo(f"  Articles: {sum(len(i.articles) for i in issues)}")
    click.echo(f"  Output:   {config.paths.dataset}")


@main.command()
@_ENV_OPTION
def translate(env: str | None) -> None:
    """Translate article titles and write them back to the dataset."""
    config = _configure(env)
    logger.info("Translating titles (env=%s)", config.env)
    try:
        stats = run_translation(config)
    except SourceReadError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Translated {stats.requested} new titles ({stats.failed} failed)")
    click.echo(f"  Cached:  {stats.cached}")
    click.echo(f"  Applied: {stats.applied}")


if __name__ == "__main__":
    main()
